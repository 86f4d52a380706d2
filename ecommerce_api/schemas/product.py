# ===================================
# ecommerce_api/schemas/product.py
# ===================================

from typing import Optional
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field


class ProductBase(BaseModel):
    nom: str = Field(min_length=1, max_length=255)
    description: str = ""
    prix: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(default=0, ge=0)
    categorie_id: int = 0


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    """Champs modifiables ; seuls ceux présents sont appliqués"""
    model_config = ConfigDict(extra="forbid")

    nom: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    prix: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock: Optional[int] = Field(None, ge=0)
    categorie_id: Optional[int] = None


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nom: str
    description: str
    prix: Decimal
    stock: int
    image_url: str = ""
    categorie_id: int
