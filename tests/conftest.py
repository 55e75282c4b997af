from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from helpers import CapturedStreams


@pytest.fixture
def captured(tmp_path: Path) -> Iterator[CapturedStreams]:
    streams = CapturedStreams(tmp_path)
    try:
        yield streams
    finally:
        streams.close()
