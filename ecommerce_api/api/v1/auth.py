# ===================================
# ecommerce_api/api/v1/auth.py
# ===================================
import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ecommerce_api.api.deps import get_current_client
from ecommerce_api.core.config import settings
from ecommerce_api.core.database import get_db
from ecommerce_api.core.exceptions import ValidationFailed
from ecommerce_api.core.security import create_access_token, verify_password
from ecommerce_api.models.client import Client
from ecommerce_api.repositories.client_repo import ClientRepository
from ecommerce_api.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from ecommerce_api.schemas.client import ClientOut

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_response(client: Client) -> AuthResponse:
    return AuthResponse(
        access_token=create_access_token(client),
        token_type="bearer",
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        client=ClientOut.model_validate(client),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    register_data: RegisterRequest,
    db: Session = Depends(get_db)
) -> Any:
    """
    Inscription d'un nouveau client (toujours avec le rôle "user")
    """
    client = ClientRepository(db).create_client(
        nom=register_data.nom,
        prenom=register_data.prenom,
        email=register_data.email,
        password=register_data.mot_de_passe,
        adresse=register_data.adresse,
        telephone=register_data.telephone,
    )
    logger.info(f"Nouveau client inscrit: {client.id}")
    return _auth_response(client)


@router.post("/login", response_model=AuthResponse)
def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
) -> Any:
    """
    Connexion d'un client
    """
    client = ClientRepository(db).get_client_by_email(login_data.email)

    if not client or not verify_password(login_data.mot_de_passe, client.mot_de_passe):
        logger.warning(f"Échec de connexion pour {login_data.email}")
        raise ValidationFailed("Email ou mot de passe incorrect")

    return _auth_response(client)


@router.get("/me", response_model=ClientOut)
def get_current_client_info(
    current_client: Client = Depends(get_current_client)
) -> Any:
    """
    Récupérer les informations du client connecté
    """
    return ClientOut.model_validate(current_client)
