# ===================================
# ecommerce_api/schemas/order.py
# ===================================
from typing import Dict, List, Optional
from datetime import datetime
from decimal import Decimal
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ecommerce_api.schemas.product import ProductOut


# Lignes de commande
class OrderDetailCreate(BaseModel):
    """Le prix unitaire n'est jamais fourni : il est copié depuis le produit"""
    model_config = ConfigDict(extra="forbid")

    commande_id: int
    produit_id: int
    quantite: int = Field(gt=0, description="Quantité doit être positive")


class OrderDetailUpdate(BaseModel):
    """Seule la quantité d'une ligne est modifiable"""
    model_config = ConfigDict(extra="forbid")

    quantite: Optional[int] = Field(None, gt=0, description="Quantité doit être positive")


class OrderDetailOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    commande_id: int
    produit_id: Optional[int] = None
    quantite: int
    prix_unitaire: Decimal
    product: Optional[ProductOut] = None


# Commandes
class OrderCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    client_id: int
    date_commande: Optional[datetime] = None  # assignée par le serveur si absente
    statut: Optional[str] = Field(None, min_length=1)


class OrderUpdate(BaseModel):
    """Le total est recalculé par le serveur, il n'est pas modifiable"""
    model_config = ConfigDict(extra="forbid")

    statut: Optional[str] = Field(None, min_length=1)


class OrderStatusUpdate(BaseModel):
    # la clé "status" des clients existants reste acceptée
    statut: Optional[str] = Field(None, validation_alias=AliasChoices("statut", "status"))


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    date_commande: datetime
    statut: str
    total: Decimal
    order_details: List[OrderDetailOut] = []


# Statistiques client
class RecentOrderOut(BaseModel):
    id: int
    date_commande: datetime
    statut: str
    total: Decimal
    number_of_items: int


class ClientStatsOut(BaseModel):
    id: int
    nom: str
    prenom: str
    email: str
    adresse: str
    telephone: str
    role: str

    total_orders: int = 0
    total_spent: Decimal = Decimal("0.00")
    total_products_bought: int = 0
    orders_by_status: Dict[str, int] = {}
    last_order_date: Optional[datetime] = None
    recent_orders: List[RecentOrderOut] = []
