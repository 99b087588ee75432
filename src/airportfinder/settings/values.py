"""Centralized default values loaded from YAML.

The master source is ``values.yml`` in this package. On import we parse
the YAML and merge it over the fallback literals below, so a missing or
corrupt file still leaves the application with working defaults.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

__all__ = ["HTTP", "PROVIDERS", "RANKING", "SEARCH"]

logger = logging.getLogger(__name__)

_PKG_DIR = Path(__file__).parent
_YAML_PATH = _PKG_DIR / "values.yml"

# --- Fallback literals ---------------------------------------------------
_FALLBACK_PROVIDERS: Dict[str, Dict[str, Any]] = {
    "geocoder": {
        "url": "https://nominatim.openstreetmap.org/search",
        "limit": 5,
        "min_query_length": 3,
    },
    "routing": {"url": "https://router.project-osrm.org/route/v1/driving"},
    "dataset": {
        "url": "https://davidmegginson.github.io/ourairports-data/airports.csv"
    },
}
_FALLBACK_HTTP: Dict[str, Any] = {
    "user_agent": "AirportProximityFinder/1.0",
    "timeout_s": 30.0,
    "routing_timeout_s": 10.0,
}
_FALLBACK_RANKING: Dict[str, Any] = {
    "commercial_types": ["large_airport", "medium_airport"],
    "driving_buffer": 1.5,
    "max_routed_candidates": 20,
    "routing_delay_s": 0.1,
}
_FALLBACK_SEARCH: Dict[str, Any] = {
    "default_radius_km": 100,
    "default_mode": "straight",
}


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        logger.warning("Ignoring unreadable defaults file %s", path, exc_info=True)
        return {}
    return raw if isinstance(raw, dict) else {}


def _merge_section(base: Dict[str, Any], override: object) -> Dict[str, Any]:
    out = dict(base)
    if isinstance(override, dict):
        for k, v in override.items():
            if k in base and type(v) is type(base[k]):
                out[k] = v
            elif k in base and isinstance(base[k], float) and isinstance(v, int):
                out[k] = float(v)
    return out


_raw = _load_yaml(_YAML_PATH)
_raw_providers = _raw.get("providers")
if not isinstance(_raw_providers, dict):
    _raw_providers = {}

_providers = {
    name: _merge_section(section, _raw_providers.get(name))
    for name, section in _FALLBACK_PROVIDERS.items()
}

# --- Public accessors ----------------------------------------------------
PROVIDERS: Dict[str, Dict[str, Any]] = _providers
HTTP: Dict[str, Any] = _merge_section(_FALLBACK_HTTP, _raw.get("http"))
RANKING: Dict[str, Any] = _merge_section(_FALLBACK_RANKING, _raw.get("ranking"))
SEARCH: Dict[str, Any] = _merge_section(_FALLBACK_SEARCH, _raw.get("search"))
