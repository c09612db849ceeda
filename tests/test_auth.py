"""
Auth tests: signup, login, token claims and bearer-token enforcement
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from sqlalchemy import select

from movie_booking.core.config import settings
from movie_booking.services import create_access_token, decode_access_token
from movie_booking.services.auth_service import pwd_context
from movie_booking.core.exceptions import AuthError
from movie_booking.models import User


# ============================================================================
# SIGNUP
# ============================================================================
class TestSignup:

    @pytest.mark.asyncio
    async def test_signup_success(self, client):
        response = await client.post("/signup", json={"email": "a@x.com", "password": "pw"})

        assert response.status_code == 201
        assert response.json() == {"message": "User registered successfully"}

    @pytest.mark.asyncio
    async def test_signup_twice_rejects_second(self, client):
        first = await client.post("/signup", json={"email": "a@x.com", "password": "pw"})
        second = await client.post("/signup", json={"email": "a@x.com", "password": "other"})

        assert first.status_code == 201
        assert second.status_code == 400
        assert second.json()["detail"] == "Email already registered"

    @pytest.mark.asyncio
    async def test_signup_missing_password(self, client):
        response = await client.post("/signup", json={"email": "a@x.com"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid request"

    @pytest.mark.asyncio
    async def test_password_stored_as_digest(self, client, db_session):
        await client.post("/signup", json={"email": "a@x.com", "password": "pw"})
        result = await db_session.execute(select(User).where(User.email == "a@x.com"))
        user = result.scalar_one()

        assert user.password != "pw"
        assert pwd_context.verify("pw", user.password)


# ============================================================================
# LOGIN
# ============================================================================
class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success(self, client, user):
        user_id, email = user
        response = await client.post("/login", json={"email": email, "password": "pw"})

        assert response.status_code == 200
        data = response.json()
        assert data["auth"] is True
        assert data["token"]
        assert data["user_id"] == user_id

    @pytest.mark.asyncio
    async def test_login_token_round_trip(self, client, user):
        user_id, email = user
        response = await client.post("/login", json={"email": email, "password": "pw"})

        claims = decode_access_token(response.json()["token"])
        assert claims["user_id"] == user_id
        assert claims["email"] == email

    @pytest.mark.asyncio
    async def test_login_token_expires_in_a_day(self, client, user):
        _, email = user
        response = await client.post("/login", json={"email": email, "password": "pw"})

        claims = decode_access_token(response.json()["token"])
        expires_at = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
        remaining = expires_at - datetime.now(timezone.utc)
        assert timedelta(hours=23) < remaining <= timedelta(hours=24)

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, client):
        response = await client.post("/login", json={"email": "nobody@x.com", "password": "pw"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Email or password incorrect"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client, user):
        _, email = user
        response = await client.post("/login", json={"email": email, "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"


# ============================================================================
# TOKENS
# ============================================================================
class TestTokens:

    def test_decode_rejects_tampered_token(self):
        token = create_access_token(7, "a@x.com")
        forged = jwt.encode({"user_id": 1, "email": "a@x.com"}, "another-secret-of-sufficient-length!!", algorithm="HS256")

        assert decode_access_token(token)["user_id"] == 7
        with pytest.raises(AuthError) as exc_info:
            decode_access_token(forged)
        assert exc_info.value.status_code == 403

    def test_decode_rejects_expired_token(self):
        expired = jwt.encode(
            {"user_id": 7, "email": "a@x.com", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )

        with pytest.raises(AuthError, match="expired"):
            decode_access_token(expired)


# ============================================================================
# BEARER-TOKEN ENFORCEMENT
# ============================================================================
class TestRequireAuth:

    @pytest.mark.asyncio
    async def test_routes_open_when_not_enforced(self, client, catalog):
        response = await client.get("/movies")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_missing_token_rejected(self, client, catalog, require_auth):
        response = await client.get("/movies")

        assert response.status_code == 403
        assert response.json()["detail"] == "Missing bearer token"

    @pytest.mark.asyncio
    async def test_invalid_token_rejected(self, client, catalog, require_auth):
        response = await client.get("/movies", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_non_bearer_scheme_rejected(self, client, catalog, require_auth):
        response = await client.get("/movies", headers={"Authorization": "Basic abc"})

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_valid_token_accepted(self, client, catalog, user, require_auth):
        _, email = user
        login = await client.post("/login", json={"email": email, "password": "pw"})
        token = login.json()["token"]

        response = await client.get("/movies", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_signup_and_login_stay_open(self, client, require_auth):
        signup = await client.post("/signup", json={"email": "b@x.com", "password": "pw"})
        login = await client.post("/login", json={"email": "b@x.com", "password": "pw"})

        assert signup.status_code == 201
        assert login.status_code == 200
