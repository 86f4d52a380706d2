"""
Modèles SQLAlchemy.
Importer ce package enregistre toutes les tables dans Base.metadata
(utilisé par init_db et par Alembic).
"""

from ecommerce_api.core.database import Base

from .client import Client, ClientRole
from .product import Product
from .order import Order, OrderDetail

__all__ = ['Base', 'Client', 'ClientRole', 'Product', 'Order', 'OrderDetail']
