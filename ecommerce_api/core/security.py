# ===================================
# ecommerce_api/core/security.py
# ===================================

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from passlib.context import CryptContext
from pydantic import ValidationError

from ecommerce_api.core.config import settings
from ecommerce_api.core.exceptions import Forbidden, Unauthenticated
from ecommerce_api.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

# Configuration du hachage des mots de passe
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__default_rounds=settings.password_hash_rounds,
)

# Le token est optionnel ici : son absence est traitée par le garde (401)
security = HTTPBearer(auto_error=False)


def get_password_hash(password: str) -> str:
    """Hacher un mot de passe"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Vérifier un mot de passe"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # hash illisible ou d'un schéma inconnu
        return False


def create_access_token(client, expires_delta: Optional[timedelta] = None) -> str:
    """Créer un token d'accès JWT pour un client"""
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)

    to_encode = {
        "sub": str(client.id),
        "email": client.email,
        "role": client.role,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> TokenClaims:
    """Décoder et valider un token JWT (signature, expiration, émetteur, audience)"""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
        return TokenClaims(**payload)
    except (JWTError, ValidationError) as e:
        logger.warning(f"Token refusé: {e}")
        raise Unauthenticated("Token invalide ou expiré")


@dataclass(frozen=True)
class AuthRequirement:
    """
    Exigence d'authentification d'une route.

    - ``AuthRequirement.none()`` : accès libre
    - ``AuthRequirement.authenticated()`` : token valide requis
    - ``AuthRequirement.role("admin")`` : token valide portant ce rôle
    """
    kind: str
    role_name: Optional[str] = None

    NONE = "none"
    AUTHENTICATED = "authenticated"
    ROLE = "role"

    @classmethod
    def none(cls) -> "AuthRequirement":
        return cls(cls.NONE)

    @classmethod
    def authenticated(cls) -> "AuthRequirement":
        return cls(cls.AUTHENTICATED)

    @classmethod
    def role(cls, name: str) -> "AuthRequirement":
        return cls(cls.ROLE, name)


def check_requirement(requirement: AuthRequirement, claims: Optional[TokenClaims]) -> None:
    """Lever Unauthenticated (401) ou Forbidden (403) si l'exigence n'est pas remplie"""
    if requirement.kind == AuthRequirement.NONE:
        return
    if claims is None:
        raise Unauthenticated("Authentification requise")
    if requirement.kind == AuthRequirement.ROLE and claims.role != requirement.role_name:
        raise Forbidden(f"Rôle requis: {requirement.role_name}")


def get_optional_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[TokenClaims]:
    """Claims du token Bearer s'il est présent, None sinon"""
    if credentials is None:
        return None
    return decode_token(credentials.credentials)


def require(requirement: AuthRequirement):
    """Dépendance FastAPI vérifiant une exigence avant l'exécution de la route"""
    def requirement_checker(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    ) -> Optional[TokenClaims]:
        if requirement.kind == AuthRequirement.NONE:
            return None
        claims = get_optional_claims(credentials)
        check_requirement(requirement, claims)
        return claims

    return requirement_checker
