"""Authentication service for decoding session JWTs."""

from functools import lru_cache
from typing import Dict, Any
from jose import JWTError, jwt
from config import AuthConfig


@lru_cache(maxsize=1)
def get_auth_config() -> AuthConfig:
    return AuthConfig.from_environment()


def decode_jwt_token(token: str) -> Dict[str, Any]:
    """Decode and validate a JWT token."""
    config = get_auth_config()
    try:
        payload = jwt.decode(
            token,
            config.jwt_secret_key,
            algorithms=[config.jwt_algorithm],
            options={"verify_aud": False}
        )
        return payload
    except JWTError as e:
        raise ValueError(f"Invalid token: {str(e)}")
