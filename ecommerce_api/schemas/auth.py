# ===================================
# ecommerce_api/schemas/auth.py
# ===================================
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from ecommerce_api.schemas.client import ClientOut


class RegisterRequest(BaseModel):
    nom: str = Field(min_length=1)
    prenom: str = Field(min_length=1)
    email: EmailStr
    mot_de_passe: str = Field(min_length=6)
    adresse: Optional[str] = None
    telephone: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr
    mot_de_passe: str


class TokenClaims(BaseModel):
    """Claims décodés d'un access token"""
    sub: int
    email: Optional[str] = None
    role: str


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    client: ClientOut
