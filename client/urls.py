from typing import Any, Dict, Optional

from client import settings


def get_api_base_url(base: Optional[str] = None) -> str:
    raw = (settings.API_BASE_URL if base is None else base) or ""
    raw = raw.strip()
    return raw[:-1] if raw.endswith("/") else raw


def build_api_url(path: str, base: Optional[str] = None) -> str:
    """
    Resolve an API path against the base URL.
    Absolute URLs pass through; with no base the path stays relative.
    """
    p = str(path or "")
    if not p:
        return p
    if p.startswith("http://") or p.startswith("https://"):
        return p
    root = get_api_base_url(base)
    p = p if p.startswith("/") else f"/{p}"
    return f"{root}{p}" if root else p


def with_csrf_headers(headers: Dict[str, str], cookies: Any = None) -> Dict[str, str]:
    """Copy the CSRF cookie into its header (if we have the cookie)."""
    out = dict(headers)
    token = cookies.get(settings.CSRF_COOKIE_NAME) if cookies is not None else None
    if token:
        out[settings.CSRF_HEADER_NAME] = token
    return out
