"""
Load config from config.yaml with optional env overrides.
Single source of truth for provider priority, endpoints, timeouts and cache policy.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List

import yaml

# Defaults if no YAML or env
_DEFAULTS: Dict[str, Any] = {
    "providers": {
        "current_priority": ["coingecko", "bitfinex"],
        "historical_priority": ["coingecko", "livecoinwatch"],
    },
    "http": {"timeout_s": 15.0},
    "coingecko": {"base_url": "https://api.coingecko.com/api/v3"},
    "bitfinex": {"base_url": "https://api-pub.bitfinex.com/v2"},
    "livecoinwatch": {"base_url": "https://api.livecoinwatch.com", "api_key": ""},
    "history": {"fallback_delay_ms": 300, "strict_timeframes": True},
    "cache": {
        "refresh_interval_ms": 60_000,
        "deduping_window_ms": 15_000,
        "revalidate_on_focus": True,
    },
}


def _config_yaml_path() -> Path:
    """BTC_PRICE_FEED_CONFIG if set, else config.yaml at repo root (parent of package dir)."""
    explicit = os.environ.get("BTC_PRICE_FEED_CONFIG", "").strip()
    if explicit:
        return Path(explicit)
    return Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    config_path = _config_yaml_path()
    if not config_path.exists():
        return {}
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _env_overrides() -> dict:
    overrides: dict = {}
    api_key = os.environ.get("LIVECOINWATCH_API_KEY")
    if api_key:
        overrides.setdefault("livecoinwatch", {})["api_key"] = api_key
    timeout = os.environ.get("BTC_PRICE_FEED_HTTP_TIMEOUT_S")
    if timeout:
        overrides.setdefault("http", {})["timeout_s"] = float(timeout)
    refresh = os.environ.get("BTC_PRICE_FEED_REFRESH_INTERVAL_MS")
    if refresh:
        overrides.setdefault("cache", {})["refresh_interval_ms"] = int(refresh)
    dedup = os.environ.get("BTC_PRICE_FEED_DEDUPING_WINDOW_MS")
    if dedup:
        overrides.setdefault("cache", {})["deduping_window_ms"] = int(dedup)
    return overrides


def get_config() -> dict:
    """Return merged config: defaults <- config.yaml <- env."""
    merged = _deep_merge(_DEFAULTS, _load_yaml())
    merged = _deep_merge(merged, _env_overrides())
    return merged


# Convenience accessors
def current_priority() -> List[str]:
    return list(get_config()["providers"]["current_priority"])


def historical_priority() -> List[str]:
    return list(get_config()["providers"]["historical_priority"])


def fallback_delay_s() -> float:
    return float(get_config()["history"]["fallback_delay_ms"]) / 1000.0


def strict_timeframes() -> bool:
    return bool(get_config()["history"]["strict_timeframes"])


def refresh_interval_ms() -> int:
    return int(get_config()["cache"]["refresh_interval_ms"])


def deduping_window_ms() -> int:
    return int(get_config()["cache"]["deduping_window_ms"])


def revalidate_on_focus() -> bool:
    return bool(get_config()["cache"]["revalidate_on_focus"])
