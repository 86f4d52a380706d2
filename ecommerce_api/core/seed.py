# ===================================
# ecommerce_api/core/seed.py
# ===================================
import logging
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from ecommerce_api.core.config import settings
from ecommerce_api.models.client import ClientRole
from ecommerce_api.models.product import Product
from ecommerce_api.repositories.client_repo import ClientRepository

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    {
        "nom": "Product 1",
        "description": "Description for product 1",
        "prix": Decimal("19.99"),
        "stock": 100,
        "image_url": "/uploads/products/default.jpg",
        "categorie_id": 1,
    },
    {
        "nom": "Product 2",
        "description": "Description for product 2",
        "prix": Decimal("29.99"),
        "stock": 50,
        "image_url": "/uploads/products/default.jpg",
        "categorie_id": 1,
    },
]


def seed_database(db: Session) -> None:
    """Insérer les données d'exemple si la base est vide"""
    if not db.scalar(select(func.count(Product.id))):
        db.add_all(Product(**data) for data in SAMPLE_PRODUCTS)
        db.commit()
        logger.info(f"{len(SAMPLE_PRODUCTS)} produits d'exemple insérés")

    if settings.first_admin_email and settings.first_admin_password:
        client_repo = ClientRepository(db)
        if client_repo.get_client_by_email(settings.first_admin_email) is None:
            client_repo.create_client(
                nom="Admin",
                prenom="Admin",
                email=settings.first_admin_email,
                password=settings.first_admin_password,
                role=ClientRole.ADMIN,
            )
            logger.info(f"Administrateur créé: {settings.first_admin_email}")
