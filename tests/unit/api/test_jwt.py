from datetime import timedelta
from uuid import uuid4

from jose import jwt

from config import ApplicationConfig
from guild_service.api.utils.jwt import create_access_token, user_id_from_token, verify_jwt


def test_token_identifies_its_user():
    user_id = uuid4()

    token = create_access_token(user_id)

    assert user_id_from_token(token) == user_id
    assert verify_jwt(token)["user_id"] == str(user_id)


def test_expired_token_is_rejected():
    token = create_access_token(uuid4(), expires_delta=timedelta(seconds=-1))

    assert verify_jwt(token) is None
    assert user_id_from_token(token) is None


def test_token_signed_with_another_secret_is_rejected():
    token = jwt.encode({"user_id": str(uuid4())}, "some-other-secret", algorithm="HS256")

    assert user_id_from_token(token) is None


def test_token_without_usable_user_id_is_rejected():
    missing = jwt.encode({"sub": "x"}, ApplicationConfig.JWT_SECRET, algorithm="HS256")
    malformed = jwt.encode(
        {"user_id": "not-a-uuid"}, ApplicationConfig.JWT_SECRET, algorithm="HS256"
    )

    assert user_id_from_token(missing) is None
    assert user_id_from_token(malformed) is None
