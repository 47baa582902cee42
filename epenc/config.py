"""Runtime settings: YAML file plus environment overrides."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from epenc.errors import ConfigError

DEFAULT_CONFIG_PATH = "epenc.yaml"
SCAN_MODES = ("json", "text")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(slots=True)
class Settings:
    output_dir: Path = Path("output")
    log_dir: Path | None = None
    working_dir: Path | None = None
    handbrake_path: str = "HandBrakeCLI"
    scan_mode: str = "json"
    language: str = "eng"
    min_scan_duration: int = 5  # minutes
    allow_no_subtitles: bool = False
    extension: str = "mkv"
    remap_dirs: dict[str, str] = field(default_factory=dict)
    video_bitrate: int = 1600
    audio_bitrate: int = 192
    encoder_preset: str = "medium"

    @property
    def resolved_log_dir(self) -> Path:
        return self.log_dir if self.log_dir is not None else self.output_dir / "logs"

    @property
    def min_scan_seconds(self) -> int:
        return self.min_scan_duration * 60

    def ensure_directories(self) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.resolved_log_dir.mkdir(parents=True, exist_ok=True)


def parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name}: expected a boolean, got {value!r}")


def _parse_int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name}: expected an integer, got {value!r}") from None


def _optional_path(value: Any) -> Path | None:
    if value is None or value == "":
        return None
    return Path(str(value)).expanduser()


def load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return data


def build_settings(data: dict[str, Any]) -> Settings:
    scan_mode = str(data.get("scan_mode", "json")).lower()
    if scan_mode not in SCAN_MODES:
        raise ConfigError(f"scan_mode: expected one of {', '.join(SCAN_MODES)}, got {scan_mode!r}")

    remap = data.get("remap_dirs") or {}
    if not isinstance(remap, dict):
        raise ConfigError("remap_dirs: expected a mapping of search -> replacement")

    return Settings(
        output_dir=Path(str(data.get("output_dir", "output"))).expanduser(),
        log_dir=_optional_path(data.get("log_dir")),
        working_dir=_optional_path(data.get("working_dir")),
        handbrake_path=str(data.get("handbrake_path", "HandBrakeCLI")),
        scan_mode=scan_mode,
        language=str(data.get("language", "eng")),
        min_scan_duration=_parse_int(data.get("min_scan_duration", 5), "min_scan_duration"),
        allow_no_subtitles=parse_bool(data.get("allow_no_subtitles", False), "allow_no_subtitles"),
        extension=str(data.get("extension", "mkv")).lstrip("."),
        remap_dirs={str(k): str(v) for k, v in remap.items()},
        video_bitrate=_parse_int(data.get("video_bitrate", 1600), "video_bitrate"),
        audio_bitrate=_parse_int(data.get("audio_bitrate", 192), "audio_bitrate"),
        encoder_preset=str(data.get("encoder_preset", "medium")),
    )


def apply_env_overrides(settings: Settings, env: Mapping[str, str]) -> Settings:
    raw = env.get("MIN_SCAN_DURATION")
    if raw is not None and raw.strip():
        settings.min_scan_duration = _parse_int(raw, "MIN_SCAN_DURATION")
    raw = env.get("ALLOW_NO_SUBTITLES")
    if raw is not None:
        settings.allow_no_subtitles = parse_bool(raw, "ALLOW_NO_SUBTITLES")
    raw = env.get("EPENC_OUTPUT_DIR")
    if raw:
        settings.output_dir = Path(raw).expanduser()
    raw = env.get("HANDBRAKE_PATH")
    if raw:
        settings.handbrake_path = raw
    return settings


def load_settings(path: Path | None = None, env: Mapping[str, str] | None = None) -> Settings:
    """Load settings from *path* (or ``$EPENC_CONFIG``), then apply env overrides.

    A missing config file is not an error; defaults are used.
    """
    environ = os.environ if env is None else env
    if path is None:
        path = Path(environ.get("EPENC_CONFIG", DEFAULT_CONFIG_PATH))
    data = load_yaml_file(path) if path.is_file() else {}
    return apply_env_overrides(build_settings(data), environ)
