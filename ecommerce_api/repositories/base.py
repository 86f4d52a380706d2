# ===================================
# ecommerce_api/repositories/base.py
# ===================================
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ecommerce_api.core.exceptions import ConcurrencyConflict, NotFound


def _stale_write(db: Session, model=None, entity_id=None):
    """Annuler la transaction et choisir l'erreur à remonter"""
    db.rollback()
    if model is not None and entity_id is not None and db.get(model, entity_id) is None:
        return NotFound()
    return ConcurrencyConflict()


def flush(db: Session, model=None, entity_id=None) -> None:
    """Envoyer les écritures en attente, avec la même traduction que commit()"""
    try:
        db.flush()
    except StaleDataError:
        raise _stale_write(db, model, entity_id)


def commit(db: Session, model=None, entity_id=None) -> None:
    """
    Valider la transaction en cours.

    Une écriture obsolète (ligne modifiée ou supprimée entre-temps) annule la
    transaction : NotFound si la ligne n'existe plus, ConcurrencyConflict sinon.
    """
    try:
        db.commit()
    except StaleDataError:
        raise _stale_write(db, model, entity_id)
