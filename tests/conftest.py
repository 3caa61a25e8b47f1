"""Global pytest fixtures & helpers.

Adds the project root and this directory to path, and exposes the synthetic
track factories from ``helpers`` as fixtures for the geometry tests.
"""
from __future__ import annotations

import os
import sys
from typing import List

import pytest

HERE = os.path.abspath(os.path.dirname(__file__))
ROOT = os.path.abspath(os.path.join(HERE, ".."))
for path in (ROOT, HERE):
    if path not in sys.path:
        sys.path.insert(0, path)

from trail_itinerary.models import NamedSegment, TrackPoint

from helpers import make_line, make_out_and_back


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def out_and_back() -> List[TrackPoint]:
    return make_out_and_back(11)


@pytest.fixture
def abc_segments() -> List[NamedSegment]:
    """A ends at X, B runs X -> Y, C starts at Y (far from X)."""

    a = NamedSegment("A", make_line(5, (0.0, 0.0), (0.0, 0.01)))
    b = NamedSegment("B", make_line(5, (0.0, 0.01), (0.0, 0.05)))
    c = NamedSegment("C", make_line(5, (0.0, 0.05), (0.0, 0.06)))
    return [a, b, c]
