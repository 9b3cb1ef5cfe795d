"""HTTP utilities for URL handling and response error mapping."""

from __future__ import annotations

from typing import Any

import httpx

from bujo.core.exceptions import ApiError, NetworkError, UnauthorizedError


def normalize_base_url(base_url: str) -> str:
    """Return ``base_url`` with exactly one trailing slash."""
    return base_url.strip().rstrip("/") + "/"


def join_url(base_url: str, path: str) -> str:
    """Append a relative endpoint path to a normalized base URL."""
    return normalize_base_url(base_url) + path.lstrip("/")


def _response_detail(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def raise_for_api_status(
    response: httpx.Response, *, session_errors: bool = True
) -> httpx.Response:
    """Translate an unsuccessful response into the client's error types."""
    if response.is_success:
        return response
    detail = _response_detail(response)
    if session_errors and response.status_code == httpx.codes.UNAUTHORIZED:
        raise UnauthorizedError()
    raise ApiError(
        f"Request failed with status {response.status_code}",
        status_code=response.status_code,
        detail=detail,
    )


def network_error(exc: httpx.TransportError) -> NetworkError:
    """Wrap a transport failure in a generic, caller-facing error."""
    return NetworkError(f"Network error: {exc.__class__.__name__}")


__all__ = ["join_url", "network_error", "normalize_base_url", "raise_for_api_status"]
