"""Run configuration and the optional settings file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence

import yaml  # type: ignore[import-not-found]
from jsonschema import Draft202012Validator  # type: ignore[import-not-found]

from .errors import SettingsError
from .orchestrator import DEFAULT_BUILD_DESCRIPTOR, DEFAULT_BUILD_TOOL, DEFAULT_TARGETS
from .registry import DEFAULT_PRIMARY_PROJECT

logger = logging.getLogger("nightly.config")

CONFIG_ENV = "NIGHTLY_BUILD_CONFIG"

SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "projects_root": {"type": "string", "minLength": 1},
        "primary_project": {"type": "string", "minLength": 1},
        "build_tool": {"type": "string", "minLength": 1},
        "build_descriptor": {"type": "string", "minLength": 1},
        "targets": {"type": "array", "items": {"type": "string"}, "minItems": 1},
    },
}


@dataclass(frozen=True)
class Settings:
    """Site settings; the defaults are the stock nightly build behaviour."""

    projects_root: Path | None = None
    primary_project: str = DEFAULT_PRIMARY_PROJECT
    build_tool: str = DEFAULT_BUILD_TOOL
    build_descriptor: str = DEFAULT_BUILD_DESCRIPTOR
    default_targets: tuple[str, ...] = DEFAULT_TARGETS


@dataclass(frozen=True)
class Configuration:
    """What this run does: where to look, whether to update, what to build."""

    projects_root: Path
    should_update: bool
    targets: tuple[str, ...]


def build_configuration(
    *,
    projects_root: str | Path | None,
    no_update: bool,
    targets: Iterable[str],
    settings: Settings,
    fallback_root: Path,
) -> Configuration:
    root = projects_root or settings.projects_root or fallback_root
    chosen: Sequence[str] = list(targets) or settings.default_targets
    return Configuration(
        projects_root=Path(root).expanduser(),
        should_update=not no_update,
        targets=tuple(chosen),
    )


def _iter_error_messages(payload: Any) -> Iterable[str]:
    validator = Draft202012Validator(SETTINGS_SCHEMA)
    for error in validator.iter_errors(payload):
        path = ".".join(str(idx) for idx in error.path) or "settings"
        yield f"{path}: {error.message}"


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from ``path`` or ``$NIGHTLY_BUILD_CONFIG``.

    With neither given the defaults are returned. A file that was asked for
    but does not exist is an error.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV)
        if not env_path:
            return Settings()
        path = Path(env_path)
    path = path.expanduser()
    if not path.is_file():
        raise SettingsError(f"Settings file missing at {path}.")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise SettingsError(f"Unable to read settings {path}: {exc}") from exc

    errors = list(_iter_error_messages(data))
    if errors:
        raise SettingsError(f"Invalid settings in {path}:\n" + "\n".join(errors))

    logger.debug("Loaded settings from %s: %s", path, data)
    root = data.get("projects_root")
    return Settings(
        projects_root=Path(root).expanduser() if root else None,
        primary_project=data.get("primary_project", DEFAULT_PRIMARY_PROJECT),
        build_tool=data.get("build_tool", DEFAULT_BUILD_TOOL),
        build_descriptor=data.get("build_descriptor", DEFAULT_BUILD_DESCRIPTOR),
        default_targets=tuple(data.get("targets", DEFAULT_TARGETS)),
    )
