# ===================================
# ecommerce_api/models/product.py
# ===================================
from sqlalchemy import Column, Integer, String, Text, DECIMAL, CheckConstraint
from sqlalchemy.orm import relationship

from ecommerce_api.core.database import Base


class Product(Base):
    __tablename__ = "product"
    __table_args__ = (
        CheckConstraint('stock >= 0', name='check_product_stock_positive'),
        CheckConstraint('prix >= 0', name='check_product_prix_positive'),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Informations principales
    nom = Column(String, nullable=False)
    description = Column(Text, default="", nullable=False)
    prix = Column(DECIMAL(10, 2), nullable=False)

    # Stock restant : seule source de vérité pour l'inventaire
    stock = Column(Integer, default=0, nullable=False)

    # Référence renvoyée par le stockage de fichiers
    image_url = Column(String, default="", nullable=False)
    categorie_id = Column(Integer, default=0, nullable=False)

    # Relations
    order_details = relationship("OrderDetail", back_populates="product", passive_deletes=True)

    def __repr__(self):
        return f"<Product(id={self.id}, nom='{self.nom}', stock={self.stock})>"
