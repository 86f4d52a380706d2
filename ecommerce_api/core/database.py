# ===================================
# ecommerce_api/core/database.py
# ===================================
import logging
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker

from ecommerce_api.core.config import settings

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False, "timeout": 30} if settings.is_sqlite else {}

# Configuration du moteur SQLAlchemy
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    echo=settings.debug,  # Log des requêtes SQL en mode debug
    connect_args=connect_args,
)

if settings.is_sqlite:
    # pysqlite ouvre ses transactions trop tard : on les gère nous-mêmes
    @event.listens_for(engine, "connect")
    def _sqlite_on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Verrou d'écriture pris dès le début : les écrivains concurrents attendent
    @event.listens_for(engine, "begin")
    def _sqlite_on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def get_db() -> Generator:
    """
    Générateur de session de base de données pour l'injection de dépendance FastAPI
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Crée les tables manquantes
    """
    import ecommerce_api.models  # noqa: F401  enregistre les modèles

    Base.metadata.create_all(bind=engine)
    logger.info("Tables créées")


def check_db_connection() -> bool:
    """
    Vérifie la connexion à la base de données
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Erreur de connexion DB: {e}")
        return False
