# press_core/data/settings.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Mapping

from press_core.data.loader import load_yaml_typed
from press_core.models.settings import ValidationSettings


def load_settings(path: str | Path | None = None, overrides: Mapping[str, Any] | None = None) -> ValidationSettings:
    """Load validation settings from YAML/JSON, then apply recognised overrides on top."""
    settings = load_yaml_typed(Path(path), model=ValidationSettings) if path else ValidationSettings()
    if overrides:
        settings = settings.merged(overrides)
    return settings
