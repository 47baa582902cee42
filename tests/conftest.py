from pathlib import Path

import pytest

_FIXTURE_DIR: Path = Path(__file__).parent / "fixtures"


@pytest.fixture
def json_scan_output() -> str:
    """Captured ``HandBrakeCLI --scan --json`` stdout for a four-title disc."""
    return (_FIXTURE_DIR / "handbrake_scan_json.txt").read_text(encoding="utf-8")


@pytest.fixture
def text_scan_output() -> str:
    """Captured HandBrakeCLI text scan log for a three-title DVD."""
    return (_FIXTURE_DIR / "handbrake_scan_text.txt").read_text(encoding="utf-8")


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    out = tmp_path / "output"
    out.mkdir()
    return out
