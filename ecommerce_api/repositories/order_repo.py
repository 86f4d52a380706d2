# ===================================
# ecommerce_api/repositories/order_repo.py
# ===================================
from typing import List, Optional
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select, desc
from sqlalchemy.orm import Session, selectinload

from ecommerce_api.core.config import settings
from ecommerce_api.core.exceptions import NotFound
from ecommerce_api.models.order import Order, OrderDetail
from ecommerce_api.repositories.base import commit


def _with_details():
    return selectinload(Order.order_details).selectinload(OrderDetail.product)


class OrderRepository:
    """Repository pour la gestion des commandes"""

    def __init__(self, db: Session):
        self.db = db

    def create_order(self, client_id: int, date_commande: Optional[datetime] = None,
                     statut: Optional[str] = None) -> Order:
        """Créer une nouvelle commande, vide et de total nul"""
        order = Order(
            client_id=client_id,
            date_commande=date_commande or datetime.now(timezone.utc),
            statut=statut or settings.default_order_status,
            total=Decimal("0.00"),
        )
        self.db.add(order)
        commit(self.db)
        self.db.refresh(order)
        return order

    def get_order_by_id(self, order_id: int, with_details: bool = True) -> Optional[Order]:
        """Récupérer une commande par son ID"""
        query = select(Order).where(Order.id == order_id)
        if with_details:
            query = query.options(_with_details())
        return self.db.scalar(query)

    def get_order_or_404(self, order_id: int, with_details: bool = True) -> Order:
        order = self.get_order_by_id(order_id, with_details=with_details)
        if order is None:
            raise NotFound("Commande non trouvée")
        return order

    def get_orders(self, skip: int = 0, limit: int = 50,
                   statut: Optional[str] = None) -> List[Order]:
        """Récupérer toutes les commandes"""
        query = select(Order)
        if statut:
            query = query.where(Order.statut == statut)
        return list(self.db.scalars(
            query.options(_with_details())
            .order_by(Order.id)
            .offset(skip)
            .limit(limit)
        ))

    def get_client_orders(self, client_id: int, skip: int = 0, limit: int = 50) -> List[Order]:
        """Récupérer les commandes d'un client, les plus récentes d'abord"""
        return list(self.db.scalars(
            select(Order)
            .where(Order.client_id == client_id)
            .options(_with_details())
            .order_by(desc(Order.date_commande), desc(Order.id))
            .offset(skip)
            .limit(limit)
        ))

    def save(self, order: Order) -> Order:
        """Persister les modifications d'une commande"""
        commit(self.db, Order, order.id)
        return order

    # Lignes de commande

    def get_order_detail_by_id(self, detail_id: int) -> Optional[OrderDetail]:
        """Récupérer une ligne de commande avec son produit"""
        return self.db.scalar(
            select(OrderDetail)
            .where(OrderDetail.id == detail_id)
            .options(selectinload(OrderDetail.product))
        )

    def get_order_detail_or_404(self, detail_id: int) -> OrderDetail:
        detail = self.get_order_detail_by_id(detail_id)
        if detail is None:
            raise NotFound("Ligne de commande non trouvée")
        return detail

    def get_order_details(self, skip: int = 0, limit: int = 100,
                          order_id: Optional[int] = None) -> List[OrderDetail]:
        """Récupérer les lignes de commande, éventuellement d'une seule commande"""
        query = select(OrderDetail)
        if order_id is not None:
            query = query.where(OrderDetail.commande_id == order_id)
        return list(self.db.scalars(
            query.options(selectinload(OrderDetail.product))
            .order_by(OrderDetail.id)
            .offset(skip)
            .limit(limit)
        ))
