"""Type definitions and central imports for the bytevec package."""

from typing import Any

import numpy
from numpy.typing import DTypeLike

__all__: list[str] = []

np: Any = numpy

_ElementType = DTypeLike
"""Anything NumPy accepts as a dtype; its ``itemsize`` is the element size of a typed view."""
