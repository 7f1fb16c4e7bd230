# rigkit/core/config.py
"""
Layout defaults used when a caller does not name a storage type.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class LayoutConfig:
    # 32-bit float matches what shaders expect for uniform/instance data
    dtype: str = 'f4'

    def resolve(self, dtype=None) -> np.dtype:
        return np.dtype(self.dtype if dtype is None else dtype)


DEFAULT_LAYOUT = LayoutConfig()
