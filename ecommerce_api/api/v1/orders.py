# ===================================
# ecommerce_api/api/v1/orders.py
# ===================================
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from ecommerce_api.api.deps import admin_only, get_pagination_params, location_for
from ecommerce_api.core.database import get_db
from ecommerce_api.core.exceptions import InvalidReference, ValidationFailed
from ecommerce_api.models.client import Client
from ecommerce_api.repositories.order_repo import OrderRepository
from ecommerce_api.schemas.order import OrderCreate, OrderOut, OrderStatusUpdate, OrderUpdate
from ecommerce_api.services.inventory_service import InventoryService
from ecommerce_api.services.patching import apply_patch

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[OrderOut])
def list_orders(
    pagination: tuple[int, int] = Depends(get_pagination_params),
    statut: Optional[str] = Query(None, description="Filtrer par statut"),
    db: Session = Depends(get_db)
) -> Any:
    """
    Récupérer toutes les commandes avec leurs lignes
    """
    skip, limit = pagination
    orders = OrderRepository(db).get_orders(skip=skip, limit=limit, statut=statut)
    return [OrderOut.model_validate(order) for order in orders]


@router.get("/client/{client_id}", response_model=List[OrderOut])
def list_client_orders(
    client_id: int,
    pagination: tuple[int, int] = Depends(get_pagination_params),
    db: Session = Depends(get_db)
) -> Any:
    """
    Récupérer les commandes d'un client
    """
    skip, limit = pagination
    orders = OrderRepository(db).get_client_orders(client_id, skip=skip, limit=limit)
    return [OrderOut.model_validate(order) for order in orders]


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    db: Session = Depends(get_db)
) -> Any:
    """
    Récupérer une commande par son ID
    """
    return OrderOut.model_validate(OrderRepository(db).get_order_or_404(order_id))


@router.post("/", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def create_order(
    order_data: OrderCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db)
) -> Any:
    """
    Créer une commande vide ; le total est calculé à partir des lignes
    """
    if db.get(Client, order_data.client_id) is None:
        raise InvalidReference("Identifiant de client invalide")

    order_repo = OrderRepository(db)
    order = order_repo.create_order(
        client_id=order_data.client_id,
        date_commande=order_data.date_commande,
        statut=order_data.statut,
    )

    logger.info(f"Commande créée: {order.id} (client {order.client_id})")
    response.headers["Location"] = location_for(request, "get_order", order_id=order.id)
    return OrderOut.model_validate(order_repo.get_order_or_404(order.id))


@router.patch("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def patch_order(
    order_id: int,
    order_update: OrderUpdate,
    _admin=Depends(admin_only),
    db: Session = Depends(get_db)
) -> Response:
    """
    Mettre à jour le statut d'une commande (Admin)
    """
    order_repo = OrderRepository(db)
    order = order_repo.get_order_or_404(order_id, with_details=False)
    apply_patch(order, order_update)
    order_repo.save(order)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{order_id}/status", status_code=status.HTTP_204_NO_CONTENT)
def update_order_status(
    order_id: int,
    status_update: OrderStatusUpdate,
    _admin=Depends(admin_only),
    db: Session = Depends(get_db)
) -> Response:
    """
    Changer le statut d'une commande (Admin)
    """
    if not status_update.statut or not status_update.statut.strip():
        raise ValidationFailed("Le statut est requis")

    order_repo = OrderRepository(db)
    order = order_repo.get_order_or_404(order_id, with_details=False)
    old_status = order.statut
    order.statut = status_update.statut.strip()
    order_repo.save(order)

    logger.info(f"Commande {order_id}: {old_status} → {order.statut}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(
    order_id: int,
    _admin=Depends(admin_only),
    db: Session = Depends(get_db)
) -> Response:
    """
    Supprimer une commande ; le stock de chaque ligne est restitué (Admin)
    """
    InventoryService(db).delete_order(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
