# ===================================
# ecommerce_api/services/patching.py
# ===================================
from typing import Any, Dict

from pydantic import BaseModel


def present_fields(patch: BaseModel) -> Dict[str, Any]:
    """Champs réellement fournis dans la requête (null = absent)"""
    return {
        field: value
        for field, value in patch.model_dump(exclude_unset=True).items()
        if value is not None
    }


def apply_patch(target: Any, patch: BaseModel) -> Dict[str, Any]:
    """
    Appliquer uniquement les champs présents du patch sur l'entité.
    Retourne les champs modifiés.
    """
    changes = present_fields(patch)
    for field, value in changes.items():
        setattr(target, field, value)
    return changes
