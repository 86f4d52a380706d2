# ===================================
# ecommerce_api/api/v1/order_details.py
# ===================================
from typing import Any, List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from ecommerce_api.api.deps import get_pagination_params, location_for
from ecommerce_api.core.database import get_db
from ecommerce_api.repositories.order_repo import OrderRepository
from ecommerce_api.schemas.order import OrderDetailCreate, OrderDetailOut, OrderDetailUpdate
from ecommerce_api.services.inventory_service import InventoryService

router = APIRouter()


@router.get("/", response_model=List[OrderDetailOut])
def list_order_details(
    pagination: tuple[int, int] = Depends(get_pagination_params),
    db: Session = Depends(get_db)
) -> Any:
    """Récupérer toutes les lignes de commande"""
    skip, limit = pagination
    details = OrderRepository(db).get_order_details(skip=skip, limit=limit)
    return [OrderDetailOut.model_validate(detail) for detail in details]


@router.get("/order/{order_id}", response_model=List[OrderDetailOut])
def list_details_for_order(
    order_id: int,
    pagination: tuple[int, int] = Depends(get_pagination_params),
    db: Session = Depends(get_db)
) -> Any:
    """Récupérer les lignes d'une commande"""
    skip, limit = pagination
    details = OrderRepository(db).get_order_details(skip=skip, limit=limit, order_id=order_id)
    return [OrderDetailOut.model_validate(detail) for detail in details]


@router.get("/{detail_id}", response_model=OrderDetailOut)
def get_order_detail(
    detail_id: int,
    db: Session = Depends(get_db)
) -> Any:
    return OrderDetailOut.model_validate(OrderRepository(db).get_order_detail_or_404(detail_id))


@router.post("/", response_model=OrderDetailOut, status_code=status.HTTP_201_CREATED)
def create_order_detail(
    detail_data: OrderDetailCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db)
) -> Any:
    """
    Ajouter une ligne à une commande.

    Le stock du produit est décrémenté et le prix unitaire est copié depuis
    le produit. Stock insuffisant : 400 et rien n'est modifié.
    """
    detail = InventoryService(db).create_detail(detail_data)
    response.headers["Location"] = location_for(request, "get_order_detail", detail_id=detail.id)
    return OrderDetailOut.model_validate(detail)


@router.patch("/{detail_id}", status_code=status.HTTP_204_NO_CONTENT)
def patch_order_detail(
    detail_id: int,
    detail_update: OrderDetailUpdate,
    db: Session = Depends(get_db)
) -> Response:
    """Modifier la quantité d'une ligne ; le stock est ajusté de la différence"""
    InventoryService(db).update_detail(detail_id, detail_update)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{detail_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order_detail(
    detail_id: int,
    db: Session = Depends(get_db)
) -> Response:
    """Supprimer une ligne ; sa quantité est restituée au stock"""
    InventoryService(db).delete_detail(detail_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
