from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from jose import jwt

from ecommerce_api.core.config import settings
from ecommerce_api.core.exceptions import Forbidden, Unauthenticated
from ecommerce_api.core.security import (
    AuthRequirement,
    check_requirement,
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from ecommerce_api.schemas.auth import TokenClaims


def _client(role="user"):
    return SimpleNamespace(id=42, email="jean@example.com", role=role)


class TestPasswords:

    def test_hash_is_not_the_password(self):
        hashed = get_password_hash("secret123")
        assert hashed != "secret123"
        assert verify_password("secret123", hashed)

    def test_wrong_password(self):
        assert not verify_password("autre", get_password_hash("secret123"))

    def test_unreadable_hash_is_rejected(self):
        assert verify_password("secret123", "pas-un-hash") is False


class TestTokens:

    def test_round_trip_claims(self):
        claims = decode_token(create_access_token(_client(role="admin")))

        assert claims.sub == 42
        assert claims.email == "jean@example.com"
        assert claims.role == "admin"

    def test_expired_token(self):
        token = create_access_token(_client(), expires_delta=timedelta(seconds=-10))
        with pytest.raises(Unauthenticated):
            decode_token(token)

    def test_wrong_audience(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "1", "role": "user", "iss": settings.jwt_issuer, "aud": "autre",
             "iat": now, "exp": now + timedelta(minutes=5)},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(Unauthenticated):
            decode_token(token)

    def test_wrong_signature(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "1", "role": "user", "iss": settings.jwt_issuer,
             "aud": settings.jwt_audience, "exp": now + timedelta(minutes=5)},
            "une-autre-cle",
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(Unauthenticated):
            decode_token(token)

    def test_garbage(self):
        with pytest.raises(Unauthenticated):
            decode_token("abc.def.ghi")


class TestRequirements:

    user = TokenClaims(sub=1, email="u@example.com", role="user")
    admin = TokenClaims(sub=2, email="a@example.com", role="admin")

    def test_none_accepts_anonymous(self):
        check_requirement(AuthRequirement.none(), None)

    def test_authenticated_rejects_anonymous(self):
        with pytest.raises(Unauthenticated) as exc_info:
            check_requirement(AuthRequirement.authenticated(), None)
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    def test_authenticated_accepts_any_role(self):
        check_requirement(AuthRequirement.authenticated(), self.user)
        check_requirement(AuthRequirement.authenticated(), self.admin)

    def test_role_rejects_anonymous_with_401(self):
        with pytest.raises(Unauthenticated):
            check_requirement(AuthRequirement.role("admin"), None)

    def test_role_mismatch_is_forbidden(self):
        with pytest.raises(Forbidden):
            check_requirement(AuthRequirement.role("admin"), self.user)

    def test_role_match(self):
        check_requirement(AuthRequirement.role("admin"), self.admin)
