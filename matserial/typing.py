# coding: utf-8

# Copyright 2023 Inria (Institut National de Recherche en Informatique
# et Automatique)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Type hinting utils, defined and exposed for code readability purposes."""

from abc import ABCMeta, abstractmethod
from typing import Optional, Protocol

import numpy as np

from matserial.codec._types import ElementType


__all__ = [
    "SupportsPayload",
]


class SupportsPayload(Protocol, metaclass=ABCMeta):
    """Protocol for arrays that may be encoded into or decoded from buffers.

    This is the narrow interface through which codecs access the
    value types they (de)serialize: the element type, the current
    and statically-fixed extents, a resizing method, and a writable
    flat byte view of the (contiguous, row-major) element storage.

    A `fixed_<axis>` property that is None denotes a dynamic extent,
    that `resize` may alter; otherwise, the extent must be matched.
    """

    @property
    @abstractmethod
    def element_type(self) -> ElementType:
        """Type of the array's elements."""

    @property
    @abstractmethod
    def rows(self) -> int:
        """Current number of rows."""

    @property
    @abstractmethod
    def cols(self) -> int:
        """Current number of columns."""

    @property
    @abstractmethod
    def channels(self) -> int:
        """Current number of channels."""

    @property
    @abstractmethod
    def fixed_rows(self) -> Optional[int]:
        """Statically-fixed number of rows, or None if dynamic."""

    @property
    @abstractmethod
    def fixed_cols(self) -> Optional[int]:
        """Statically-fixed number of columns, or None if dynamic."""

    @property
    @abstractmethod
    def fixed_channels(self) -> Optional[int]:
        """Statically-fixed number of channels, or None if dynamic."""

    @abstractmethod
    def resize(
        self,
        rows: int,
        cols: int,
        channels: int,
    ) -> None:
        """Resize the array, discarding its contents if the shape changes.

        Raise a ValueError if a statically-fixed extent would change.
        """

    @abstractmethod
    def raw_view(self) -> np.ndarray:
        """Return a writable flat uint8 view over the element storage."""
