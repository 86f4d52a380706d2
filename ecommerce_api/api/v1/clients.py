# ===================================
# ecommerce_api/api/v1/clients.py
# ===================================
from typing import Any, List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from ecommerce_api.api.deps import authenticated, get_pagination_params, location_for
from ecommerce_api.core.database import get_db
from ecommerce_api.repositories.client_repo import ClientRepository
from ecommerce_api.schemas.client import ClientCreate, ClientDetailOut, ClientOut, ClientUpdate
from ecommerce_api.schemas.order import ClientStatsOut
from ecommerce_api.services.stats_service import StatsService

router = APIRouter()


@router.get("/", response_model=List[ClientOut])
def list_clients(
    pagination: tuple[int, int] = Depends(get_pagination_params),
    db: Session = Depends(get_db)
) -> Any:
    """Récupérer la liste des clients"""
    skip, limit = pagination
    clients = ClientRepository(db).get_clients(skip=skip, limit=limit)
    return [ClientOut.model_validate(client) for client in clients]


@router.get("/{client_id}", response_model=ClientDetailOut)
def get_client(
    client_id: int,
    db: Session = Depends(get_db)
) -> Any:
    """Récupérer un client avec ses commandes, leurs lignes et leurs produits"""
    client = ClientRepository(db).get_client_or_404(client_id, with_orders=True)
    return ClientDetailOut.model_validate(client)


@router.get("/{client_id}/stats", response_model=ClientStatsOut)
def get_client_stats(
    client_id: int,
    _claims=Depends(authenticated),
    db: Session = Depends(get_db)
) -> Any:
    """Récupérer les statistiques d'achat d'un client"""
    return StatsService(db).client_stats(client_id)


@router.post("/", response_model=ClientOut, status_code=status.HTTP_201_CREATED)
def create_client(
    client_data: ClientCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db)
) -> Any:
    """Créer un client ; le mot de passe est haché avant stockage"""
    client = ClientRepository(db).create_client(
        nom=client_data.nom,
        prenom=client_data.prenom,
        email=client_data.email,
        password=client_data.mot_de_passe,
        adresse=client_data.adresse,
        telephone=client_data.telephone,
    )
    response.headers["Location"] = location_for(request, "get_client", client_id=client.id)
    return ClientOut.model_validate(client)


@router.patch("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def patch_client(
    client_id: int,
    client_update: ClientUpdate,
    db: Session = Depends(get_db)
) -> Response:
    """Mettre à jour uniquement les champs fournis d'un client"""
    ClientRepository(db).update_client(client_id, client_update)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(
    client_id: int,
    db: Session = Depends(get_db)
) -> Response:
    """Supprimer un client qui n'a pas de commande"""
    ClientRepository(db).delete_client(client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
