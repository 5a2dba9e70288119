"""Environment configuration for the AdvogaAI tools backend."""

import os
from dataclasses import dataclass
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

DEFAULT_TOOLS_URL = "https://api.advogaai.com/v1"


@dataclass(frozen=True)
class ToolsConfig:
    """Remote tool execution endpoint settings."""
    base_url: str
    api_key: str
    timeout_seconds: Optional[float] = None  # None keeps calls unbounded

    @classmethod
    def from_environment(cls) -> "ToolsConfig":
        """
        Load from environment variables:
        - ADVOGAAI_TOOLS_URL
        - ADVOGAAI_TOOLS_API_KEY
        - ADVOGAAI_TOOLS_TIMEOUT (seconds, optional)
        """
        timeout = os.getenv("ADVOGAAI_TOOLS_TIMEOUT")
        return cls(
            base_url=os.getenv("ADVOGAAI_TOOLS_URL") or DEFAULT_TOOLS_URL,
            api_key=os.getenv("ADVOGAAI_TOOLS_API_KEY", ""),
            timeout_seconds=float(timeout) if timeout else None,
        )


@dataclass(frozen=True)
class SupabaseConfig:
    url: str
    service_key: str
    legalflow_schema: str = "legalflow"

    @classmethod
    def from_environment(cls) -> "SupabaseConfig":
        url = os.getenv("SUPABASE_URL", "")
        service_key = os.getenv("SUPABASE_SERVICE_KEY", "")

        if not url:
            raise ValueError("SUPABASE_URL environment variable is required")
        if not service_key:
            raise ValueError("SUPABASE_SERVICE_KEY environment variable is required")

        return cls(
            url=url,
            service_key=service_key,
            legalflow_schema=os.getenv("LEGALFLOW_SCHEMA", "legalflow"),
        )


@dataclass(frozen=True)
class AuthConfig:
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"

    @classmethod
    def from_environment(cls) -> "AuthConfig":
        secret = os.getenv("JWT_SECRET_KEY", "")
        if not secret:
            raise ValueError("JWT_SECRET_KEY environment variable is required")
        return cls(
            jwt_secret_key=secret,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        )


def get_cors_origins() -> List[str]:
    """Allowed CORS origins, comma separated in CORS_ORIGINS."""
    raw = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8080")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
