"""Profile loading for ``tablecheck.toml`` configuration files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes.
    import tomli as tomllib  # type: ignore[no-redef]

import structlog
from pydantic import ValidationError

from tablecheck.reconcile.models import StatusThresholds
from tablecheck_cli.utils.errors import TableCheckConfigError

log = structlog.get_logger(__name__)

CONFIG_FILENAME = "tablecheck.toml"
PROFILE_ENV = "TABLECHECK_PROFILE"
PROJECT_ROOT_ENV = "TABLECHECK_PROJECT_ROOT"


@dataclass(frozen=True)
class ProfileContext:
    """A resolved profile plus the files it was merged from."""

    name: str
    data: Mapping[str, Any]
    sources: tuple[Path, ...]

    def delimiter(self) -> Optional[str]:
        value = self.data.get("delimiter")
        if value is None:
            return None
        if not isinstance(value, str) or len(value) != 1:
            raise TableCheckConfigError(
                f"Profile '{self.name}' delimiter must be a single character, got {value!r}"
            )
        return value

    def key_fields(self) -> Optional[List[str]]:
        value = self.data.get("key_fields")
        if value is None:
            return None
        if isinstance(value, str):
            return split_key_fields(value)
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return [item.strip() for item in value if item.strip()]
        raise TableCheckConfigError(
            f"Profile '{self.name}' key_fields must be a list of column names"
        )

    def strict(self) -> bool:
        value = self.data.get("strict", False)
        if not isinstance(value, bool):
            raise TableCheckConfigError(
                f"Profile '{self.name}' strict must be true or false, got {value!r}"
            )
        return value


def split_key_fields(raw: str) -> List[str]:
    """Split a comma separated ``--key-fields`` value."""

    return [part.strip() for part in raw.split(",") if part.strip()]


def load_profile(
    *,
    profile: str | None = None,
    workspace: Path | None = None,
    project_root: Path | None = None,
) -> ProfileContext:
    """Merge every ``tablecheck.toml`` found and select *profile*.

    Files are read user first, then project, then workspace; later files win
    through a deep merge. The profile name comes from *profile*, then the
    ``TABLECHECK_PROFILE`` environment variable, then the merged
    ``default_profile`` key, and finally ``"default"``.
    """

    merged: Dict[str, Any] = {}
    sources: list[Path] = []
    for path in _iter_config_paths(workspace=workspace, project_root=project_root):
        try:
            with path.open("rb") as handle:
                document = tomllib.load(handle)
        except OSError as exc:  # pragma: no cover - filesystem errors are rare.
            raise TableCheckConfigError(
                f"Unable to read configuration file '{path}': {exc}"
            ) from exc
        except tomllib.TOMLDecodeError as exc:
            raise TableCheckConfigError(
                f"Configuration file '{path}' is not valid TOML: {exc}"
            ) from exc
        merged = _deep_merge(merged, document)
        sources.append(path)

    profiles = merged.get("profiles", {})
    if not isinstance(profiles, Mapping):
        raise TableCheckConfigError(
            "The 'profiles' table must contain mappings of settings"
        )

    name = _determine_profile_name(merged, profile)
    if name in profiles:
        raw = profiles[name]
        if not isinstance(raw, Mapping):
            raise TableCheckConfigError(
                f"Profile '{name}' must be a mapping of configuration values"
            )
        data: Mapping[str, Any] = dict(raw)
    elif name == "default" or not profiles:
        data = {}
    else:
        available = ", ".join(sorted(str(key) for key in profiles))
        raise TableCheckConfigError(
            f"Profile '{name}' was not found. Available profiles: {available}."
        )

    log.debug("config.profile.loaded", profile=name, sources=[str(p) for p in sources])
    return ProfileContext(name=name, data=data, sources=tuple(sources))


def thresholds_from_profile(context: ProfileContext) -> StatusThresholds:
    """Build :class:`StatusThresholds` from the profile's ``status_thresholds`` table."""

    raw = context.data.get("status_thresholds", {})
    if not isinstance(raw, Mapping):
        raise TableCheckConfigError(
            f"Profile '{context.name}' status_thresholds must be a table"
        )
    try:
        return StatusThresholds(**raw)
    except ValidationError as exc:
        raise TableCheckConfigError(
            f"Profile '{context.name}' has invalid status thresholds: {exc}"
        ) from exc


def _iter_config_paths(
    *, workspace: Path | None, project_root: Path | None
) -> Iterable[Path]:
    home = Path(os.path.expanduser("~"))
    candidates: list[Path] = []
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        candidates.append(Path(xdg_config) / "tablecheck" / CONFIG_FILENAME)
    candidates.extend(
        [
            home / ".config" / "tablecheck" / CONFIG_FILENAME,
            home / ".tablecheck" / CONFIG_FILENAME,
            home / CONFIG_FILENAME,
        ]
    )

    if project_root is None:
        env_root = os.environ.get(PROJECT_ROOT_ENV)
        project_root = Path(env_root) if env_root else Path.cwd()
    candidates.extend(
        [
            project_root / CONFIG_FILENAME,
            project_root / ".tablecheck" / CONFIG_FILENAME,
        ]
    )

    if workspace is not None:
        candidates.append(workspace / CONFIG_FILENAME)

    seen: set[Path] = set()
    for path in candidates:
        if path.exists() and path not in seen:
            seen.add(path)
            yield path


def _deep_merge(base: Dict[str, Any], new: Mapping[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {**base}
    for key, value in new.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _deep_merge(dict(current), value)
        else:
            merged[key] = value
    return merged


def _determine_profile_name(config: Mapping[str, Any], override: str | None) -> str:
    if override:
        return override
    env_profile = os.environ.get(PROFILE_ENV)
    if env_profile:
        return env_profile
    default_profile = config.get("default_profile")
    if isinstance(default_profile, str) and default_profile:
        return default_profile
    return "default"


__all__ = [
    "CONFIG_FILENAME",
    "ProfileContext",
    "load_profile",
    "split_key_fields",
    "thresholds_from_profile",
]
