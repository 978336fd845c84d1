from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from thumbfit.core.bounds import Bounds, validate_bounds

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
PROFILES_VERSION = "v1"
DEFAULT_PROFILES_PATH = DATA_DIR / f"bounds_profiles_{PROFILES_VERSION}.json"


@dataclass(frozen=True)
class Padding:
    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    @property
    def horizontal(self) -> int:
        return self.left + self.right

    @property
    def vertical(self) -> int:
        return self.top + self.bottom


@dataclass(frozen=True)
class BoundsProfile:
    name: str
    bounds: Bounds
    padding: Padding = field(default_factory=Padding)
    corner_radius: int = 0


@dataclass(frozen=True)
class ServiceConfig:
    profiles_path: Path = DEFAULT_PROFILES_PATH
    probe_cache_size: int = 256
    max_upload_bytes: int = 10 * 1024 * 1024
    log_level: str = "INFO"


def _positive_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> ServiceConfig:
    env = os.environ if environ is None else environ
    profiles_path = env.get("THUMBFIT_PROFILES_PATH")
    return ServiceConfig(
        profiles_path=Path(profiles_path) if profiles_path else DEFAULT_PROFILES_PATH,
        probe_cache_size=_positive_int(env, "THUMBFIT_PROBE_CACHE_SIZE", 256),
        max_upload_bytes=_positive_int(env, "THUMBFIT_MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
        log_level=env.get("THUMBFIT_LOG_LEVEL", "INFO").upper(),
    )


def _parse_profile(name: str, entry: dict) -> BoundsProfile:
    bounds = Bounds(
        min_width=entry.get("min_width", 0),
        max_width=entry.get("max_width", 0),
        min_height=entry.get("min_height", 0),
        max_height=entry.get("max_height", 0),
    )
    validate_bounds(bounds)
    padding = Padding(**entry.get("padding", {}))
    return BoundsProfile(
        name=name,
        bounds=bounds,
        padding=padding,
        corner_radius=entry.get("corner_radius", 0),
    )


def load_profiles(path: Path) -> dict[str, BoundsProfile]:
    if not path.exists():
        raise FileNotFoundError(f"Missing bounds profiles: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    profiles = data.get("profiles")
    if not isinstance(profiles, dict):
        raise ValueError(f"Bounds profile file {path} has no 'profiles' table")

    return {name: _parse_profile(name, entry) for name, entry in profiles.items()}
