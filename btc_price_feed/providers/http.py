"""
HTTP + JSON helpers shared by the provider adapters.

Every transport problem becomes NetworkError and every undecodable body
becomes ShapeError, so adapters only deal with the decoded payload.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional

import requests

from ..core.errors import NetworkError, ShapeError

HTTP_TIMEOUT_S = 15.0
USER_AGENT = "btc-price-feed/0.1"


def _decode(resp: requests.Response, provider_name: str) -> Any:
    if resp.status_code == 429:
        raise NetworkError(f"{provider_name} rate limit (HTTP 429)", provider_name)
    try:
        resp.raise_for_status()
    except requests.HTTPError as exc:
        raise NetworkError(f"{provider_name} HTTP error: {exc}", provider_name) from exc
    try:
        return resp.json()
    except ValueError as exc:
        raise ShapeError(f"{provider_name} returned a non-JSON body", provider_name) from exc


def get_json(
    url: str,
    provider_name: str,
    *,
    params: Optional[Mapping[str, Any]] = None,
    timeout_s: float = HTTP_TIMEOUT_S,
) -> Any:
    """GET url and return the decoded JSON body."""
    try:
        resp = requests.get(
            url,
            params=params,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            timeout=timeout_s,
        )
    except requests.RequestException as exc:
        raise NetworkError(f"{provider_name} request failed: {exc}", provider_name) from exc
    return _decode(resp, provider_name)


def post_json(
    url: str,
    provider_name: str,
    *,
    body: Mapping[str, Any],
    headers: Optional[Dict[str, str]] = None,
    timeout_s: float = HTTP_TIMEOUT_S,
) -> Any:
    """POST a JSON body to url and return the decoded JSON response."""
    all_headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
    all_headers.update(headers or {})
    try:
        resp = requests.post(url, json=dict(body), headers=all_headers, timeout=timeout_s)
    except requests.RequestException as exc:
        raise NetworkError(f"{provider_name} request failed: {exc}", provider_name) from exc
    return _decode(resp, provider_name)


def require_number(value: Any, what: str, provider_name: str) -> float:
    """Return value as a finite float or raise ShapeError. Booleans are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ShapeError(f"{provider_name}: {what} is not a number ({value!r})", provider_name)
    out = float(value)
    if not math.isfinite(out):
        raise ShapeError(f"{provider_name}: {what} is not finite ({value!r})", provider_name)
    return out


def require_price(value: Any, what: str, provider_name: str) -> float:
    """require_number, additionally rejecting non-positive prices."""
    price = require_number(value, what, provider_name)
    if price <= 0:
        raise ShapeError(f"{provider_name}: non-positive {what} ({price})", provider_name)
    return price
