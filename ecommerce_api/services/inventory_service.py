# ===================================
# ecommerce_api/services/inventory_service.py
# ===================================
"""
Cohérence commandes / inventaire.

``Product.stock`` est la seule source de vérité : une ligne de commande créée
décrémente le stock, une ligne supprimée le restitue, une quantité modifiée
applique la différence. Chaque opération est une seule transaction qui
regroupe la ligne, le stock du produit et le total recalculé de la commande.
"""

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from ecommerce_api.core.exceptions import InsufficientStock, InvalidReference
from ecommerce_api.models.order import Order, OrderDetail
from ecommerce_api.models.product import Product
from ecommerce_api.repositories.base import commit, flush
from ecommerce_api.repositories.order_repo import OrderRepository
from ecommerce_api.repositories.product_repo import ProductRepository
from ecommerce_api.schemas.order import OrderDetailCreate, OrderDetailUpdate

logger = logging.getLogger(__name__)


class InventoryService:
    """Service pour la logique métier des lignes de commande et du stock"""

    def __init__(self, db: Session):
        self.db = db
        self.product_repo = ProductRepository(db)
        self.order_repo = OrderRepository(db)

    def create_detail(self, draft: OrderDetailCreate) -> OrderDetail:
        """Créer une ligne de commande et décrémenter le stock du produit"""
        try:
            order = self.db.get(Order, draft.commande_id)
            if order is None:
                raise InvalidReference("Identifiant de commande invalide")

            product = self.db.get(Product, draft.produit_id)
            if product is None:
                raise InvalidReference("Identifiant de produit invalide")

            # Prix figé au moment de la création
            unit_price = product.prix

            if not self.product_repo.try_decrement_stock(product.id, draft.quantite):
                logger.warning(
                    f"Stock insuffisant: produit={product.id} demandé={draft.quantite}"
                )
                raise InsufficientStock()

            detail = OrderDetail(
                commande_id=order.id,
                produit_id=product.id,
                quantite=draft.quantite,
                prix_unitaire=unit_price,
            )
            self.db.add(detail)
            self._recalculate_total(order)
            commit(self.db)
        except Exception:
            self.db.rollback()
            raise

        logger.debug(f"Stock décrémenté: produit={draft.produit_id} -{draft.quantite}")
        return self.order_repo.get_order_detail_by_id(detail.id)

    def update_detail(self, detail_id: int, patch: OrderDetailUpdate) -> OrderDetail:
        """Appliquer un patch de ligne ; seule la quantité peut changer"""
        if patch.quantite is None:
            return self.order_repo.get_order_detail_or_404(detail_id)
        return self.update_quantity(detail_id, patch.quantite)

    def update_quantity(self, detail_id: int, new_quantity: int) -> OrderDetail:
        """Modifier la quantité d'une ligne en ajustant le stock de la différence"""
        try:
            detail = self.order_repo.get_order_detail_or_404(detail_id)
            delta = new_quantity - detail.quantite
            if delta == 0:
                commit(self.db)
                return detail

            product_id = detail.produit_id
            if product_id is None or self.db.get(Product, product_id) is None:
                raise InvalidReference("Identifiant de produit invalide")

            if delta > 0:
                if not self.product_repo.try_decrement_stock(product_id, delta):
                    logger.warning(
                        f"Stock insuffisant: produit={product_id} supplément={delta}"
                    )
                    raise InsufficientStock()
            else:
                self.product_repo.increment_stock(product_id, -delta)

            # Le prix unitaire n'est jamais recalculé
            detail.quantite = new_quantity
            self._recalculate_total(detail.order, detail_id)
            commit(self.db, OrderDetail, detail_id)
        except Exception:
            self.db.rollback()
            raise

        logger.debug(f"Quantité modifiée: ligne={detail_id} delta={delta}")
        return self.order_repo.get_order_detail_by_id(detail_id)

    def delete_detail(self, detail_id: int) -> None:
        """Supprimer une ligne et restituer sa quantité au stock"""
        try:
            detail = self.order_repo.get_order_detail_or_404(detail_id)
            order = detail.order
            self._release_stock(detail)
            self.db.delete(detail)
            self._recalculate_total(order, detail_id)
            commit(self.db, OrderDetail, detail_id)
        except Exception:
            self.db.rollback()
            raise

    def delete_order(self, order_id: int) -> None:
        """Supprimer une commande et toutes ses lignes en restituant le stock"""
        try:
            order = self.order_repo.get_order_or_404(order_id)
            for detail in list(order.order_details):
                self._release_stock(detail)
                self.db.delete(detail)
            self.db.delete(order)
            commit(self.db, Order, order_id)
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Commande supprimée: {order_id}")

    def _release_stock(self, detail: OrderDetail) -> None:
        # Produit supprimé entre-temps : rien à restituer
        if detail.produit_id is None:
            return
        if self.product_repo.increment_stock(detail.produit_id, detail.quantite):
            logger.debug(f"Stock restitué: produit={detail.produit_id} +{detail.quantite}")

    def _recalculate_total(self, order: Order, detail_id: Optional[int] = None) -> None:
        """Recalculer le total de la commande à partir de ses lignes en base"""
        flush(self.db, OrderDetail, detail_id)
        total = self.db.scalar(
            select(func.coalesce(func.sum(OrderDetail.quantite * OrderDetail.prix_unitaire), 0))
            .where(OrderDetail.commande_id == order.id)
        )
        order.total = Decimal(str(total)).quantize(Decimal("0.01"))
