from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ServiceError,
    ServiceTimeoutError,
)
from .connection import ApiConnection

logger = logging.getLogger(__name__)


def _error_message(resp: requests.Response, fallback: str) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text.strip() or fallback
    if isinstance(data, dict):
        msg = data.get("message") or data.get("error")
        if msg:
            return str(msg)
    return fallback


def call_api(
    conn: ApiConnection,
    method: str,
    path: str,
    *,
    operation: str,
    params: Optional[dict] = None,
    json: Optional[dict] = None,
) -> Any:
    """Perform one authenticated call and return the decoded JSON body.

    Raises the ``core.exceptions`` class matching the failure: no token or 401
    -> AuthenticationError, 403 -> AuthorizationError, 404 -> NotFoundError,
    timeout -> ServiceTimeoutError, anything else -> ServiceError.
    """

    token = conn.token()
    if not token:
        raise AuthenticationError("Not authenticated")

    headers = {"Authorization": f"Bearer {token}"}
    if json is not None:
        headers["Content-Type"] = "application/json"

    query = {k: v for k, v in (params or {}).items() if v not in (None, "")}

    try:
        resp = conn.session.request(
            method,
            conn.url(path),
            params=query or None,
            json=json,
            headers=headers,
            timeout=conn.timeout,
        )
    except requests.Timeout as e:
        logger.warning("%s timed out after %ss", operation, conn.timeout)
        raise ServiceTimeoutError(f"{operation} timed out, please retry") from e
    except requests.RequestException as e:
        logger.error("%s failed: %s", operation, e)
        raise ServiceError(f"{operation} failed: {e}") from e

    if resp.ok:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            logger.error("%s returned a non-JSON body (status=%s)", operation, resp.status_code)
            raise ServiceError(f"{operation} returned an unreadable response", status_code=resp.status_code) from e

    fallback = f"{operation} failed ({resp.status_code})"
    message = _error_message(resp, fallback)
    logger.info("%s response: status=%s message=%s", operation, resp.status_code, message)

    if resp.status_code == 401:
        raise AuthenticationError(message)
    if resp.status_code == 403:
        raise AuthorizationError(message)
    if resp.status_code == 404:
        raise NotFoundError(message, status_code=404)
    raise ServiceError(message, status_code=resp.status_code)
