"""Runtime configuration helpers.

Merges the packaged defaults (``settings/values.yml``), the persisted user
settings and optional CLI overrides into one FinderSettings.
"""

from __future__ import annotations

from typing import Any, Optional

from .core.models import DistanceMode
from .settings.schema import FinderSettings
from .settings.store import SettingsStore


def make_runtime_settings(*, args: Optional[object] = None) -> FinderSettings:
    """Build the settings for one run.

    Rules:
    - Persisted settings (SettingsStore.load()) provide user defaults.
    - CLI args (argparse.Namespace-like), when provided, override
      ``range`` and ``mode`` for the current run only.
    """
    settings = SettingsStore.load()
    if args is None:
        return settings

    updates: dict[str, Any] = {}
    a_range = getattr(args, "range", None)
    if a_range is not None:
        updates["radius_km"] = int(a_range)
    a_mode = getattr(args, "mode", None)
    if a_mode is not None:
        updates["mode"] = DistanceMode(a_mode)
    if not updates:
        return settings
    # Re-validate so out-of-range overrides are rejected like persisted values
    return FinderSettings.model_validate(settings.model_dump() | updates)
