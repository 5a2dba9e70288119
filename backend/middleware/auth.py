"""Authentication middleware for protecting routes."""

from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Dict, Any
from services.auth_service import decode_jwt_token

security = HTTPBearer()


def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Dict[str, Any]:
    """
    Dependency to get the current authenticated user from the bearer JWT.

    Sessions are issued by Supabase Auth; this only checks the signature and
    reads the subject and email claims.
    """
    try:
        payload = decode_jwt_token(credentials.credentials)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {
        "user_id": user_id,
        "email": payload.get("email"),
    }


def require_auth(current_user: Dict = Depends(get_current_user)) -> Dict[str, Any]:
    """
    Simplified dependency that just checks authentication.

    Usage:
        @router.get("/protected")
        def protected_route(user: Dict = Depends(require_auth)):
            user_id = user["user_id"]
    """
    return current_user
