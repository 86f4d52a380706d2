# ===================================
# ecommerce_api/repositories/product_repo.py
# ===================================
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ecommerce_api.core.exceptions import NotFound
from ecommerce_api.models.product import Product
from ecommerce_api.repositories.base import commit


class ProductRepository:
    """Repository pour la gestion des produits"""

    def __init__(self, db: Session):
        self.db = db

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        """Récupérer un produit par son ID"""
        return self.db.get(Product, product_id)

    def get_product_or_404(self, product_id: int) -> Product:
        product = self.get_product_by_id(product_id)
        if product is None:
            raise NotFound("Produit non trouvé")
        return product

    def get_products(self, skip: int = 0, limit: int = 20,
                     categorie_id: Optional[int] = None) -> List[Product]:
        """Récupérer les produits avec filtre et pagination"""
        query = select(Product)
        if categorie_id is not None:
            query = query.where(Product.categorie_id == categorie_id)
        return list(self.db.scalars(query.order_by(Product.id).offset(skip).limit(limit)))

    def create_product(self, product_data: dict) -> Product:
        """Créer un nouveau produit"""
        product = Product(**product_data)
        self.db.add(product)
        commit(self.db)
        self.db.refresh(product)
        return product

    def save(self, product: Product) -> Product:
        """Persister les modifications d'un produit"""
        commit(self.db, Product, product.id)
        return product

    def delete_product(self, product: Product) -> None:
        """Supprimer un produit ; ses lignes de commande perdent leur référence"""
        product_id = product.id
        self.db.delete(product)
        commit(self.db, Product, product_id)

    # Opérations de stock atomiques : aucune validation n'est faite ici

    def try_decrement_stock(self, product_id: int, quantity: int) -> bool:
        """
        Décrémenter le stock si et seulement si il est suffisant.

        Une seule instruction ``UPDATE ... WHERE stock >= :q`` : le test et
        l'écriture ne peuvent pas être séparés par une autre transaction.
        Retourne False si aucune ligne n'a été modifiée.
        """
        result = self.db.execute(
            update(Product)
            .where(Product.id == product_id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def increment_stock(self, product_id: int, quantity: int) -> bool:
        """Réapprovisionner ; False si le produit n'existe plus"""
        result = self.db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(stock=Product.stock + quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
