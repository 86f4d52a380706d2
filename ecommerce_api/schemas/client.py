# ===================================
# ecommerce_api/schemas/client.py
# ===================================
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ecommerce_api.schemas.order import OrderOut


class ClientBase(BaseModel):
    nom: str = Field(min_length=1)
    prenom: str = Field(min_length=1)
    email: EmailStr
    adresse: str = ""
    telephone: str = ""


class ClientCreate(ClientBase):
    mot_de_passe: str = Field(min_length=6)


class ClientUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    nom: Optional[str] = Field(None, min_length=1)
    prenom: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    adresse: Optional[str] = None
    telephone: Optional[str] = None


class ClientOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nom: str
    prenom: str
    email: str
    adresse: str
    telephone: str
    role: str


class ClientDetailOut(ClientOut):
    """Client avec ses commandes, leurs lignes et les produits associés"""
    orders: List[OrderOut] = []
