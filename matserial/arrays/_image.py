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

"""Multi-channel image-like arrays, with fully dynamic extents."""

from typing import Any, Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike
from typing_extensions import Self  # future: import from typing (Py>=3.11)

from matserial.codec._types import ElementType, ElementTypeLike
from matserial.typing import SupportsPayload


__all__ = [
    "Image",
]


class Image(SupportsPayload):
    """Image-like array with a variable number of interleaved channels.

    Elements are stored in a C-contiguous numpy array of shape
    `(rows, cols, channels)`, so that the components of a given
    cell (e.g. color planes of a pixel) are contiguous in memory.

    Contrary to matrices, images have no statically-fixed extents:
    decoding into an image adopts the encoded shape and channels,
    provided the element type matches.
    """

    def __init__(
        self,
        element_type: ElementTypeLike,
        data: Optional[ArrayLike] = None,
    ) -> None:
        """Instantiate the image.

        Parameters
        ----------
        element_type: ElementType or str or dtype-like
            Type of the image's elements.
        data: array-like or None, default=None
            Optional initial contents, which are copied (and cast to
            `element_type`). 2-d data is treated as single-channel.
            If None, set up an empty (0, 0, 1)-shaped image.

        Raises
        ------
        TypeError
            If `element_type` is not supported.
        ValueError
            If `data` is neither 2-d nor 3-d, or has zero channels.
        """
        self._element_type = ElementType.parse(element_type)
        if data is None:
            data = np.zeros((0, 0, 1), dtype=self._element_type.dtype)
        array = np.array(data, dtype=self._element_type.dtype, order="C")
        if array.ndim == 2:
            array = array[:, :, np.newaxis]
        if array.ndim != 3:
            raise ValueError(
                f"Image data must be 2-d or 3-d, not {array.ndim}-d."
            )
        if array.shape[2] < 1:
            raise ValueError("Image data must have at least one channel.")
        self._data = array

    @classmethod
    def from_array(
        cls,
        array: np.ndarray,
    ) -> Self:
        """Wrap a copy of a 2-d or 3-d numpy array, inferring its type."""
        return cls(ElementType.from_dtype(array.dtype), data=array)

    @property
    def element_type(self) -> ElementType:
        return self._element_type

    @property
    def data(self) -> np.ndarray:
        """Numpy array storing the elements, as (rows, cols, channels)."""
        return self._data

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Current (rows, cols, channels) shape of the image."""
        return self._data.shape  # type: ignore

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def channels(self) -> int:
        return self._data.shape[2]

    @property
    def fixed_rows(self) -> Optional[int]:
        return None

    @property
    def fixed_cols(self) -> Optional[int]:
        return None

    @property
    def fixed_channels(self) -> Optional[int]:
        return None

    def resize(
        self,
        rows: int,
        cols: int,
        channels: int,
    ) -> None:
        if channels < 1:
            raise ValueError("Images must have at least one channel.")
        if (rows, cols, channels) == self.shape:
            return
        self._data = np.zeros(
            (rows, cols, channels), dtype=self._element_type.dtype
        )

    def raw_view(self) -> np.ndarray:
        return self._data.reshape(-1).view(np.uint8)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Image):
            return (self._element_type is other.element_type) and (
                np.array_equal(self._data, other.data)
            )
        return NotImplemented

    def __repr__(self) -> str:
        return f"Image({self._element_type!r}, shape={self.shape})"
