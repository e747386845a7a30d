import contextlib
import io
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

import cuemotion.__main__ as cli_main
from cuemotion.config import RenderConfig
from cuemotion.domain import CueEntry
from cuemotion.engine import CueTimeline, build_render_geometry


@pytest.fixture
def geometry():
    """1080p geometry with the default half-second transition."""
    return build_render_geometry("1080p", transition_duration=0.5)


@pytest.fixture
def sample_cues() -> list[CueEntry]:
    """Two back-to-back cues followed by a gap and a third cue."""
    return [
        CueEntry(0.0, 2.0, "A"),
        CueEntry(2.0, 4.0, "B"),
        CueEntry(6.0, 8.0, "C"),
    ]


@pytest.fixture
def sample_timeline(sample_cues, geometry) -> CueTimeline:
    return CueTimeline.build(sample_cues, None, geometry)


@pytest.fixture
def render_config() -> RenderConfig:
    return RenderConfig(resolution="1080p", frame_rate=30, line_threshold=41)


@pytest.fixture
def run_cli(monkeypatch):
    """Run the cuemotion CLI with a custom argv list."""

    def _run_cli(args: Sequence[str], *, expect_exit: bool = True) -> tuple[int, str]:
        argv = ["cuemotion", *args]
        monkeypatch.setattr(sys, "argv", argv)
        monkeypatch.setattr(cli_main, "load_dotenv", lambda: None)
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stdout):
            try:
                cli_main.main()
            except SystemExit as exc:  # pragma: no cover - exercised in tests
                return exc.code, stdout.getvalue()
        if expect_exit:
            raise AssertionError("CLI did not exit as expected")
        return 0, stdout.getvalue()

    return _run_cli


@pytest.fixture(autouse=True)
def _silence_halo(monkeypatch):
    """Replace Halo spinners with a no-op context manager for tests."""

    class _DummyHalo:
        def __init__(self, *args, **kwargs):
            self.text = kwargs.get("text")

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

    monkeypatch.setattr("cuemotion.utils.frame_report.Halo", _DummyHalo, raising=False)
    monkeypatch.setattr("cuemotion.__main__.Halo", _DummyHalo, raising=False)


@pytest.fixture
def caplog_info(caplog):
    caplog.set_level(logging.INFO)
    return caplog
