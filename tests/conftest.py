"""Pytest fixtures for dirstream tests."""

import io
import os
import tempfile
from pathlib import Path
from typing import Generator, List, Optional

import pytest
from rich.console import Console

from dirstream.events import CollectingSink, EventSink
from dirstream.models import ScanEvent
from dirstream.ui import ScanTUI


def pytest_configure(config: pytest.Config) -> None:
    """Register the markers used to group tests."""
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: tests that exercise the full scan workflow")


class FailingSink(EventSink):
    """Sink that raises once it has received a given number of events.

    Args:
        fail_on: 1-based index of the event that fails. Earlier events are
            kept in `received`.
    """

    def __init__(self, fail_on: int = 1) -> None:
        self.fail_on = fail_on
        self.received: List[ScanEvent] = []

    def emit(self, event: ScanEvent) -> None:
        if len(self.received) + 1 >= self.fail_on:
            raise ConnectionError("listener went away")
        self.received.append(event)


class FakeEntry:
    """Stand-in for os.DirEntry with a scripted stat() result."""

    def __init__(self, name: str, stat_result: Optional[os.stat_result] = None,
                 error: Optional[OSError] = None) -> None:
        self.name = name
        self._stat_result = stat_result
        self._error = error

    def stat(self, follow_symlinks: bool = True) -> os.stat_result:
        if self._error is not None:
            raise self._error
        return self._stat_result


class FakeListing:
    """Stand-in for the context-managed iterator returned by os.scandir.

    Items are yielded in order; an OSError item is raised instead of yielded.
    """

    def __init__(self, items: list) -> None:
        self._items = items

    def __enter__(self) -> "FakeListing":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        return None

    def __iter__(self):
        for item in self._items:
            if isinstance(item, OSError):
                raise item
            yield item


def make_stat(size: int = 0, is_dir: bool = False) -> os.stat_result:
    """Build an os.stat_result for a regular file or directory."""
    mode = 0o040755 if is_dir else 0o100644
    return os.stat_result((mode, 0, 0, 1, 0, 0, size, 0, 0, 0))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_directory(temp_dir: Path) -> Path:
    """Create the three-entry directory used by the ordering scenario.

    Creates:
        sample/
        ├── b.txt (2048 bytes)
        ├── a.txt (512 bytes)
        └── z/

    Returns:
        Path to the sample directory.
    """
    sample = temp_dir / "sample"
    sample.mkdir()
    (sample / "b.txt").write_bytes(b"b" * 2048)
    (sample / "a.txt").write_bytes(b"a" * 512)
    (sample / "z").mkdir()
    return sample


@pytest.fixture
def mixed_directory(temp_dir: Path) -> Path:
    """Create a directory mixing files and folders with tricky names.

    Creates:
        mixed/
        ├── Zeta/            (folder, uppercase sorts before lowercase)
        ├── alpha/           (folder containing a nested file, not listed)
        ├── .hidden          (file)
        ├── B.md             (file)
        ├── a.txt            (file)
        ├── a10.txt          (file)
        ├── a2.txt           (file)
        └── éclair.txt       (file, non-ASCII)

    Returns:
        Path to the mixed directory.
    """
    mixed = temp_dir / "mixed"
    mixed.mkdir()
    (mixed / "Zeta").mkdir()
    (mixed / "alpha").mkdir()
    (mixed / "alpha" / "nested.txt").write_text("not listed")
    (mixed / ".hidden").write_text("h")
    (mixed / "B.md").write_text("# B")
    (mixed / "a.txt").write_bytes(b"x" * 1024)
    (mixed / "a10.txt").write_text("10")
    (mixed / "a2.txt").write_text("2")
    (mixed / "éclair.txt").write_text("pastry")
    return mixed


@pytest.fixture
def large_directory(temp_dir: Path) -> Path:
    """Create a directory holding 500 empty files with distinct names.

    Returns:
        Path to the large directory.
    """
    large = temp_dir / "large"
    large.mkdir()
    for index in range(500):
        (large / f"file_{index:04d}.dat").touch()
    return large


@pytest.fixture
def collecting_sink() -> CollectingSink:
    """Return an empty CollectingSink."""
    return CollectingSink()


@pytest.fixture
def tui_with_output() -> tuple:
    """Create a ScanTUI with captured output.

    Returns:
        Tuple of (ScanTUI instance, StringIO for reading output).
    """
    output = io.StringIO()
    console = Console(file=output, force_terminal=False, width=120)
    return ScanTUI(console=console), output
