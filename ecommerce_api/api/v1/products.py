# ===================================
# ecommerce_api/api/v1/products.py
# ===================================
import logging
from decimal import Decimal
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, Response, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ecommerce_api.api.deps import admin_only, get_pagination_params, location_for
from ecommerce_api.core.database import get_db
from ecommerce_api.core.exceptions import ValidationFailed
from ecommerce_api.core.storage import FileStorage, get_storage
from ecommerce_api.repositories.product_repo import ProductRepository
from ecommerce_api.schemas.product import ProductCreate, ProductOut, ProductUpdate
from ecommerce_api.services.patching import apply_patch

logger = logging.getLogger(__name__)

router = APIRouter()


def _validated(schema, **fields):
    try:
        return schema(**fields)
    except ValidationError as e:
        raise ValidationFailed(str(e.errors()[0]["msg"]) if e.errors() else "Données invalides")


def _store_image(storage: FileStorage, image: Optional[UploadFile]) -> Optional[str]:
    """Sauvegarder l'image uploadée et retourner sa référence"""
    if image is None or not image.filename:
        return None
    data = image.file.read()
    return storage.save(data, image.filename, image.content_type)


@router.get("/", response_model=List[ProductOut])
def list_products(
    pagination: tuple[int, int] = Depends(get_pagination_params),
    categorie_id: Optional[int] = Query(None, description="Filtrer par catégorie"),
    db: Session = Depends(get_db)
) -> Any:
    """
    Récupérer la liste des produits
    """
    skip, limit = pagination
    products = ProductRepository(db).get_products(skip=skip, limit=limit, categorie_id=categorie_id)
    return [ProductOut.model_validate(product) for product in products]


@router.get("/{product_id}", response_model=ProductOut)
def get_product(
    product_id: int,
    db: Session = Depends(get_db)
) -> Any:
    """
    Récupérer un produit par son ID
    """
    return ProductOut.model_validate(ProductRepository(db).get_product_or_404(product_id))


@router.post("/", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    request: Request,
    response: Response,
    nom: str = Form(...),
    prix: Decimal = Form(...),
    description: str = Form(""),
    stock: int = Form(0),
    categorie_id: int = Form(0),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_storage)
) -> Any:
    """
    Créer un nouveau produit, avec une image optionnelle (multipart)
    """
    product_data = _validated(
        ProductCreate,
        nom=nom, description=description, prix=prix, stock=stock, categorie_id=categorie_id
    ).model_dump()

    image_url = _store_image(storage, image)
    product_data["image_url"] = image_url or ""

    try:
        product = ProductRepository(db).create_product(product_data)
    except Exception:
        storage.delete(image_url)
        raise

    logger.info(f"Produit créé: {product.id}")
    response.headers["Location"] = location_for(request, "get_product", product_id=product.id)
    return ProductOut.model_validate(product)


@router.patch("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def patch_product(
    product_id: int,
    nom: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    prix: Optional[Decimal] = Form(None),
    stock: Optional[int] = Form(None),
    categorie_id: Optional[int] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_storage)
) -> Response:
    """
    Mettre à jour uniquement les champs fournis ; une nouvelle image remplace l'ancienne
    """
    product_repo = ProductRepository(db)
    product = product_repo.get_product_or_404(product_id)

    patch = _validated(
        ProductUpdate,
        nom=nom, description=description, prix=prix, stock=stock, categorie_id=categorie_id
    )
    apply_patch(product, patch)

    old_image_url = None
    new_image_url = _store_image(storage, image)
    if new_image_url:
        old_image_url = product.image_url
        product.image_url = new_image_url

    try:
        product_repo.save(product)
    except Exception:
        storage.delete(new_image_url)
        raise

    if old_image_url:
        storage.delete(old_image_url)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    _admin=Depends(admin_only),
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_storage)
) -> Response:
    """
    Supprimer un produit et son image (Admin)
    """
    product_repo = ProductRepository(db)
    product = product_repo.get_product_or_404(product_id)
    image_url = product.image_url

    product_repo.delete_product(product)
    storage.delete(image_url)

    logger.info(f"Produit supprimé: {product_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
