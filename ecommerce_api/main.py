# ===================================
# ecommerce_api/main.py
# ===================================
from contextlib import asynccontextmanager
from pathlib import Path
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException

from ecommerce_api.core.config import settings
from ecommerce_api.core.database import SessionLocal, check_db_connection, init_db
from ecommerce_api.core.exceptions import AppError
from ecommerce_api.core.logging import setup_logging
from ecommerce_api.core.seed import seed_database

# Import des routes
from ecommerce_api.api.v1 import auth, clients, products, orders, order_details

# Configuration des logs
setup_logging()
logger = logging.getLogger(__name__)


def _error_response(status_code: int, message, error_type: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": {
                "code": status_code,
                "message": message,
                "type": error_type
            }
        },
        headers=headers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestionnaire de cycle de vie de l'application"""
    # Démarrage
    logger.info(f"Démarrage de {settings.app_name} ({settings.environment})...")

    # Vérifier la connexion DB
    if not check_db_connection():
        logger.error("Impossible de se connecter à la base de données")
        raise RuntimeError("Database connection failed")

    # Initialiser la base de données
    init_db()

    if settings.seed_database:
        db = SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()

    logger.info("Application démarrée avec succès")

    yield

    # Arrêt
    logger.info("Arrêt de l'application...")


def create_app() -> FastAPI:
    """Factory pour créer l'application FastAPI"""

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        openapi_url=f"{settings.api_prefix}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes API v1
    app.include_router(auth.router, prefix=f"{settings.api_prefix}/auth", tags=["Auth"])
    app.include_router(clients.router, prefix=f"{settings.api_prefix}/clients", tags=["Clients"])
    app.include_router(products.router, prefix=f"{settings.api_prefix}/products", tags=["Products"])
    app.include_router(orders.router, prefix=f"{settings.api_prefix}/orders", tags=["Orders"])
    app.include_router(
        order_details.router, prefix=f"{settings.api_prefix}/order-details", tags=["Order details"]
    )

    # Images produits servies telles quelles
    upload_path = Path(settings.upload_dir)
    upload_path.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=upload_path), name="uploads")

    # Route de santé
    @app.get("/health")
    async def health_check():
        """Vérification de la santé de l'API"""
        db_status = "ok" if check_db_connection() else "error"

        return {
            "status": "ok" if db_status == "ok" else "error",
            "version": settings.app_version,
            "environment": settings.environment,
            "database": db_status
        }

    # Route racine
    @app.get("/")
    async def root():
        return {
            "message": f"Bienvenue sur {settings.app_name}",
            "version": settings.app_version,
            "docs": "/docs",
            "health": "/health"
        }

    # Gestion globale des erreurs
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        return _error_response(exc.status_code, exc.message, exc.error_type, exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Données invalides") if errors else "Données invalides"
        return _error_response(400, message, "validation_error")

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return _error_response(exc.status_code, exc.detail, "http_error", getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Erreur non gérée: {exc}", exc_info=True)
        return _error_response(500, "Erreur interne du serveur", "internal_error")

    return app


# Créer l'instance de l'application
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "ecommerce_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
