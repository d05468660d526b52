"""Type aliases used across PrintLink."""

from __future__ import annotations

from typing import Callable

Clock = Callable[[], float]
