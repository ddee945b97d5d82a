from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from canvas_core.math2d import Rect  # noqa: E402


@pytest.fixture()
def device_rect() -> Rect:
    return Rect.from_points(0.0, 0.0, 1000.0, 500.0)


@pytest.fixture()
def square_cutout() -> Rect:
    return Rect.from_points(0.0, 0.0, 100.0, 100.0)
