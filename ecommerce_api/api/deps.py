# ===================================
# ecommerce_api/api/deps.py
# ===================================
from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from ecommerce_api.core.database import get_db
from ecommerce_api.core.exceptions import NotFound
from ecommerce_api.core.security import AuthRequirement, require
from ecommerce_api.models.client import Client
from ecommerce_api.repositories.client_repo import ClientRepository
from ecommerce_api.schemas.auth import TokenClaims

# Exigences utilisées par les routes
authenticated = require(AuthRequirement.authenticated())
admin_only = require(AuthRequirement.role("admin"))


def get_current_client(
    claims: TokenClaims = Depends(authenticated),
    db: Session = Depends(get_db)
) -> Client:
    """
    Récupérer le client correspondant au sujet du token
    """
    client = ClientRepository(db).get_client_by_id(claims.sub)
    if client is None:
        raise NotFound(f"Aucun client avec l'ID {claims.sub}")
    return client


def get_pagination_params(
    skip: int = Query(0, description="Nombre d'éléments à ignorer"),
    limit: int = Query(20, description="Nombre d'éléments à retourner")
) -> tuple[int, int]:
    """
    Paramètres de pagination communs
    """
    if skip < 0:
        skip = 0
    if limit < 1:
        limit = 1
    if limit > 100:
        limit = 100

    return skip, limit


def location_for(request: Request, route_name: str, **path_params) -> str:
    """URL de la ressource créée, pour l'en-tête Location"""
    return str(request.url_for(route_name, **path_params))
