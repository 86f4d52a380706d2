"""
Fixtures communes.

Les variables d'environnement sont posées avant le premier import du
package : les settings sont lus une seule fois, à l'import.
"""

import os
import tempfile
from decimal import Decimal

_TMP_DIR = tempfile.mkdtemp(prefix="ecommerce-tests-")

os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ["SEED_DATABASE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

import ecommerce_api.models  # noqa: E402,F401
from ecommerce_api.core.database import Base, SessionLocal, engine  # noqa: E402
from ecommerce_api.core.security import create_access_token  # noqa: E402
from ecommerce_api.main import app  # noqa: E402
from ecommerce_api.models.client import ClientRole  # noqa: E402
from ecommerce_api.models.product import Product  # noqa: E402
from ecommerce_api.repositories.client_repo import ClientRepository  # noqa: E402
from ecommerce_api.repositories.order_repo import OrderRepository  # noqa: E402
from ecommerce_api.repositories.product_repo import ProductRepository  # noqa: E402

API = "/api/v1"


@pytest.fixture(autouse=True)
def reset_database():
    """Base vide pour chaque test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


# Fabriques : chaque entité est créée dans sa propre session, fermée aussitôt,
# pour ne jamais garder le verrou d'écriture SQLite pendant une requête.

@pytest.fixture
def make_client():
    counter = {"n": 0}

    def _make(role: str = ClientRole.USER, email: str = None, password: str = "secret123"):
        counter["n"] += 1
        with SessionLocal() as session:
            created = ClientRepository(session).create_client(
                nom=f"Nom{counter['n']}",
                prenom=f"Prenom{counter['n']}",
                email=email or f"client{counter['n']}@example.com",
                password=password,
                role=role,
            )
            return {
                "id": created.id,
                "email": created.email,
                "role": created.role,
                "token": create_access_token(created),
            }

    return _make


@pytest.fixture
def make_product():
    def _make(prix: str = "19.99", stock: int = 10, nom: str = "Produit test", **extra):
        with SessionLocal() as session:
            product = ProductRepository(session).create_product({
                "nom": nom,
                "description": extra.get("description", ""),
                "prix": Decimal(prix),
                "stock": stock,
                "image_url": extra.get("image_url", ""),
                "categorie_id": extra.get("categorie_id", 0),
            })
            return product.id

    return _make


@pytest.fixture
def make_order(make_client):
    def _make(client_id: int = None, statut: str = None):
        if client_id is None:
            client_id = make_client()["id"]
        with SessionLocal() as session:
            return OrderRepository(session).create_order(client_id, statut=statut).id

    return _make


@pytest.fixture
def stock_of():
    def _stock(product_id: int):
        with SessionLocal() as session:
            product = session.get(Product, product_id)
            return None if product is None else product.stock

    return _stock


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(make_client):
    return _bearer(make_client(role=ClientRole.ADMIN)["token"])


@pytest.fixture
def user_headers(make_client):
    return _bearer(make_client()["token"])
