"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from epenc.config import Settings, load_settings
from epenc.errors import ConfigError


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_when_file_missing(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "missing.yaml", env={})
    assert settings == Settings()
    assert settings.resolved_log_dir == Path("output") / "logs"
    assert settings.min_scan_seconds == 300


def test_yaml_values(tmp_path: Path) -> None:
    cfg = _write(
        tmp_path / "epenc.yaml",
        """
output_dir: /media/encoded
working_dir: /media/rips
handbrake_path: /opt/HandBrakeCLI
scan_mode: text
language: fra
min_scan_duration: 10
allow_no_subtitles: yes
remap_dirs:
  /Volumes/rips: /media/rips
""",
    )
    settings = load_settings(cfg, env={})
    assert settings.output_dir == Path("/media/encoded")
    assert settings.working_dir == Path("/media/rips")
    assert settings.handbrake_path == "/opt/HandBrakeCLI"
    assert settings.scan_mode == "text"
    assert settings.language == "fra"
    assert settings.min_scan_seconds == 600
    assert settings.allow_no_subtitles is True
    assert settings.remap_dirs == {"/Volumes/rips": "/media/rips"}


def test_env_overrides_file(tmp_path: Path) -> None:
    cfg = _write(tmp_path / "epenc.yaml", "min_scan_duration: 10\n")
    settings = load_settings(
        cfg,
        env={"MIN_SCAN_DURATION": "3", "ALLOW_NO_SUBTITLES": "true", "EPENC_OUTPUT_DIR": "/tmp/out"},
    )
    assert settings.min_scan_duration == 3
    assert settings.allow_no_subtitles is True
    assert settings.output_dir == Path("/tmp/out")


def test_config_path_from_env(tmp_path: Path) -> None:
    cfg = _write(tmp_path / "custom.yaml", "language: spa\n")
    settings = load_settings(env={"EPENC_CONFIG": str(cfg)})
    assert settings.language == "spa"


@pytest.mark.parametrize(
    "text",
    [
        "scan_mode: xml\n",
        "min_scan_duration: soon\n",
        "allow_no_subtitles: maybe\n",
        "remap_dirs: [a, b]\n",
        "- just\n- a list\n",
        "output_dir: [unclosed\n",
    ],
)
def test_invalid_values_raise_config_error(tmp_path: Path, text: str) -> None:
    cfg = _write(tmp_path / "epenc.yaml", text)
    with pytest.raises(ConfigError):
        load_settings(cfg, env={})


def test_invalid_env_value(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "missing.yaml", env={"MIN_SCAN_DURATION": "five"})


def test_ensure_directories(tmp_path: Path) -> None:
    settings = Settings(output_dir=tmp_path / "out")
    settings.ensure_directories()
    assert (tmp_path / "out" / "logs").is_dir()
