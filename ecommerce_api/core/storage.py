# ===================================
# ecommerce_api/core/storage.py
# ===================================
import logging
import uuid
from pathlib import Path
from typing import List, Optional

from ecommerce_api.core.config import settings
from ecommerce_api.core.exceptions import ValidationFailed

logger = logging.getLogger(__name__)


def generate_unique_filename(original_filename: str) -> str:
    """Générer un nom de fichier unique"""
    file_extension = Path(original_filename or "").suffix.lower()
    return f"{uuid.uuid4()}{file_extension}"


class FileStorage:
    """Stockage des images produits sur le disque local"""

    def __init__(self, base_dir: str, subdir: str = "products", url_prefix: str = "/uploads",
                 allowed_types: Optional[List[str]] = None, max_size: Optional[int] = None):
        self.root = Path(base_dir)
        self.directory = self.root / subdir
        self.directory.mkdir(parents=True, exist_ok=True)
        self.url_prefix = f"{url_prefix.rstrip('/')}/{subdir}"
        self.allowed_types = allowed_types
        self.max_size = max_size

    def validate(self, data: bytes, content_type: Optional[str] = None) -> None:
        """Valider le contenu d'un fichier avant sauvegarde"""
        if not data:
            raise ValidationFailed("Aucun fichier fourni")
        if self.allowed_types is not None and content_type not in self.allowed_types:
            raise ValidationFailed(
                f"Type de fichier non autorisé. Types acceptés: {', '.join(self.allowed_types)}"
            )
        if self.max_size is not None and len(data) > self.max_size:
            raise ValidationFailed(
                f"Fichier trop volumineux. Taille maximale: {self.max_size / (1024*1024):.1f}MB"
            )

    def save(self, data: bytes, original_name: str, content_type: Optional[str] = None) -> str:
        """Sauvegarder le fichier et retourner sa référence publique"""
        self.validate(data, content_type)

        unique_filename = generate_unique_filename(original_name)
        file_path = self.directory / unique_filename
        with open(file_path, "wb") as buffer:
            buffer.write(data)

        logger.info(f"Image sauvegardée: {file_path}")
        return f"{self.url_prefix}/{unique_filename}"

    def delete(self, reference: Optional[str]) -> bool:
        """Supprimer le fichier désigné par une référence ; absent = rien à faire"""
        if not reference:
            return False

        # Seul le nom de fichier est pris en compte : pas de sortie du répertoire
        file_path = self.directory / Path(reference).name
        if file_path.is_file():
            file_path.unlink()
            logger.info(f"Image supprimée: {file_path}")
            return True
        return False


_storage: Optional[FileStorage] = None


def get_storage() -> FileStorage:
    """Dépendance FastAPI : stockage configuré depuis les settings"""
    global _storage
    if _storage is None:
        _storage = FileStorage(
            base_dir=settings.upload_dir,
            allowed_types=settings.allowed_image_types,
            max_size=settings.max_file_size,
        )
    return _storage
