from typing import Optional

from client import settings


def get_auth_header(token: Optional[str] = None, token_type: Optional[str] = None) -> Optional[str]:
    """'<type> <token>' for the Authorization header, or None when logged out."""
    token = token if token is not None else settings.API_TOKEN
    if not token:
        return None
    return f"{token_type or settings.API_TOKEN_TYPE or 'Bearer'} {token}"
