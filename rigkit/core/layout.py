# rigkit/core/layout.py
"""
Flat component I/O shared by the value types.

Every type serializes as its components in declaration order with no tag or
length prefix. Arrays are any indexable sequence; buffers are any writable
bytes-like object (bytearray, memoryview, numpy array) and the caller owns
the offset and the numeric storage type on both ends.
"""

from __future__ import annotations
from typing import Any, List, Optional, Sequence, Tuple, Type, TypeVar

import numpy as np

from .config import DEFAULT_LAYOUT

T = TypeVar('T')


# =============================================================================
# Arrays
# =============================================================================

def write_array(values: Sequence[float], array: Optional[Any] = None, index: int = 0) -> Any:
    """Write ``values`` at ``index``; with no ``array`` return a new list of exactly len(values)."""
    if array is None:
        return list(values)
    for i, value in enumerate(values):
        array[index + i] = value
    return array

def read_array(array: Any, index: int, count: int) -> List[float]:
    return [array[index + i] for i in range(count)]


# =============================================================================
# Binary buffers
# =============================================================================

def write_buffer(buffer: Any, dtype: Any, offset: int, values: Sequence[float]) -> int:
    """Write ``values`` as ``dtype`` starting at byte ``offset``. Returns the next offset."""
    dt = np.dtype(dtype)
    view = np.ndarray(shape=(len(values),), dtype=dt, buffer=buffer, offset=offset)
    view[:] = values
    return offset + len(values) * dt.itemsize

def read_buffer(buffer: Any, dtype: Any, offset: int, count: int) -> Tuple[List[float], int]:
    """Read ``count`` components of ``dtype`` at byte ``offset``. Returns (values, next offset)."""
    dt = np.dtype(dtype)
    view = np.frombuffer(buffer, dtype=dt, count=count, offset=offset)
    return [float(v) for v in view.tolist()], offset + count * dt.itemsize


# =============================================================================
# Batches
# =============================================================================

def pack(items: Sequence[Any], dtype: Any = None) -> np.ndarray:
    """Pack value objects row by row into one (n, width) array, ready for a single upload."""
    dt = DEFAULT_LAYOUT.resolve(dtype)
    if not items:
        return np.array([], dtype=dt)
    return np.array([item.to_array() for item in items], dtype=dt)

def unpack(array: Any, cls: Type[T]) -> List[T]:
    """Inverse of :func:`pack`: one ``cls`` instance per row."""
    rows = np.asarray(array)
    if rows.size == 0:
        return []
    return [cls().from_array([float(v) for v in row]) for row in rows.tolist()]
