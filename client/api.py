import asyncio
import functools
import json
import logging
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from client import settings
from client.auth import get_auth_header
from client.errors import HttpError, RequestCancelled, TransportError
from client.urls import build_api_url, with_csrf_headers

log = logging.getLogger(__name__)

# Every canonical field is also written under the legacy names the upstream
# may read instead.
FIELD_ALIASES = {
    "title": ("valueTitle", "name"),
    "pillar": ("valuePillar", "valuePillarName", "pillarName"),
    "description": ("valueDescription", "desc"),
}


def shape_payload(draft: Mapping[str, Any]) -> Dict[str, str]:
    """Outbound body: canonical title/pillar/description plus their aliases."""
    body: Dict[str, str] = {}
    for field, aliases in FIELD_ALIASES.items():
        value = draft.get(field)
        value = "" if value is None else str(value)
        body[field] = value
        for alias in aliases:
            body[alias] = value
    return body


def resolve_error_message(res) -> str:
    """{message} > {error} > raw text > 'Request failed: <status> <reason>'."""
    text = res.text or ""
    try:
        parsed = json.loads(text)
    except ValueError:
        parsed = None
    if isinstance(parsed, dict):
        for key in ("message", "error"):
            msg = parsed.get(key)
            if msg:
                return str(msg)
    if text:
        return text
    reason = getattr(res, "reason", None) or getattr(res, "reason_phrase", "") or ""
    return f"Request failed: {res.status_code} {reason}".rstrip()


def _json_or(res, default):
    try:
        return res.json()
    except ValueError:
        return default


class ValuesClient:
    """
    Async client for the values directory resource.

    The blocking `requests` call runs in a worker thread, so awaiting a
    request only suspends the calling task. Any object with the
    `requests.Session.request` signature can be passed as `session`.
    """
    def __init__(
        self,
        base_url: Optional[str] = None,
        session=None,
        auth_header: Callable[[], Optional[str]] = get_auth_header,
        timeout: Optional[float] = None,
        resource: Optional[str] = None,
    ):
        self.base_url = settings.API_BASE_URL if base_url is None else base_url
        self.session = session or requests.Session()
        self.auth_header = auth_header
        self.timeout = timeout or settings.API_TIMEOUT
        self.resource = (resource or settings.VALUES_PATH).rstrip("/")

    # --------------------------------------------------------------
    # Operations
    # --------------------------------------------------------------
    async def list_values(
        self,
        active_only: bool = True,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> Any:
        """
        GET {resource}/list. Returns the decoded body as-is (feed it to the
        list normalizer); a success body that isn't JSON becomes [].
        """
        params: Dict[str, Any] = {"activeOnly": "true" if active_only else "false"}
        if limit is not None:
            params["limit"] = int(limit)
        if cursor:
            params["cursor"] = str(cursor)
        res = await self._send("GET", f"{self.resource}/list", params=params, cancel=cancel)
        return _json_or(res, [])

    async def create_value(self, draft: Mapping[str, Any]) -> Any:
        """POST {resource}/add. Not idempotent: a retry may create a duplicate."""
        res = await self._send("POST", f"{self.resource}/add", body=shape_payload(draft))
        return _json_or(res, {})

    async def update_value(self, value_id: str, draft: Mapping[str, Any]) -> Any:
        res = await self._send(
            "PUT", f"{self.resource}/update/{value_id}", body=shape_payload(draft)
        )
        return _json_or(res, {})

    async def delete_value(self, value_id: str) -> bool:
        await self._send("DELETE", f"{self.resource}/delete/{value_id}")
        return True

    async def healthz(self) -> Any:
        res = await self._send("GET", "/healthz")
        return _json_or(res, {})

    # --------------------------------------------------------------
    # Transport
    # --------------------------------------------------------------
    def _headers(self, mutating: bool) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if mutating:
            headers["Content-Type"] = "application/json"
        auth = self.auth_header() if self.auth_header else None
        if auth:
            headers["Authorization"] = auth
        if mutating:
            headers = with_csrf_headers(headers, getattr(self.session, "cookies", None))
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
        cancel: Optional[asyncio.Event] = None,
    ):
        url = build_api_url(path, self.base_url)
        call = functools.partial(
            self.session.request,
            method,
            url,
            params=params,
            json=body,
            headers=self._headers(mutating=method != "GET"),
            timeout=self.timeout,
        )
        log.debug("%s %s params=%s", method, url, params)

        if cancel is not None and cancel.is_set():
            raise RequestCancelled(f"{method} {path} cancelled")

        try:
            if cancel is None:
                res = await asyncio.to_thread(call)
            else:
                res = await self._race(call, cancel, f"{method} {path}")
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", method, url, e)
            raise TransportError(f"{method} {path} failed: {e}") from e

        if not 200 <= res.status_code < 300:
            message = resolve_error_message(res)
            log.warning("%s %s -> %s %s", method, url, res.status_code, message)
            raise HttpError(res.status_code, message)
        return res

    @staticmethod
    async def _race(call, cancel: asyncio.Event, label: str):
        """Run `call` in a thread unless `cancel` fires first."""
        request = asyncio.ensure_future(asyncio.to_thread(call))
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait({request, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            request.cancel()
            raise
        finally:
            waiter.cancel()
        if request not in done:
            # the thread keeps running; its response is dropped
            request.cancel()
            log.debug("%s cancelled by caller", label)
            raise RequestCancelled(f"{label} cancelled")
        return request.result()
