# ===================================
# ecommerce_api/models/order.py
# ===================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, DECIMAL, CheckConstraint
from sqlalchemy.orm import relationship
from decimal import Decimal
from datetime import datetime, timezone

from ecommerce_api.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "commande"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey('client.id'), nullable=False, index=True)

    date_commande = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    statut = Column(String, nullable=False)  # texte libre, modifiable par un admin

    # Recalculé à partir des lignes à chaque mutation
    total = Column(DECIMAL(10, 2), default=Decimal("0.00"), nullable=False)

    # Relations
    client = relationship("Client", back_populates="orders")
    order_details = relationship(
        "OrderDetail", back_populates="order", order_by="OrderDetail.id",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Order(id={self.id}, client_id={self.client_id}, statut='{self.statut}')>"

    @property
    def items_count(self) -> int:
        """Nombre total d'articles dans la commande"""
        return sum(detail.quantite for detail in self.order_details)


class OrderDetail(Base):
    __tablename__ = "order_detail"
    __table_args__ = (
        CheckConstraint('quantite > 0', name='check_order_detail_quantite_positive'),
    )

    id = Column(Integer, primary_key=True, index=True)
    commande_id = Column(Integer, ForeignKey('commande.id', ondelete='CASCADE'), nullable=False, index=True)
    # SET NULL : une ligne peut survivre à la suppression de son produit
    produit_id = Column(Integer, ForeignKey('product.id', ondelete='SET NULL'), nullable=True, index=True)

    quantite = Column(Integer, nullable=False)
    # Prix figé à la création, jamais recalculé
    prix_unitaire = Column(DECIMAL(10, 2), nullable=False)

    # Relations
    order = relationship("Order", back_populates="order_details")
    product = relationship("Product", back_populates="order_details")

    def __repr__(self):
        return f"<OrderDetail(id={self.id}, commande_id={self.commande_id}, qty={self.quantite})>"
