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

"""Single-channel matrices, with optionally-fixed extents."""

from typing import Any, Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike
from typing_extensions import Self  # future: import from typing (Py>=3.11)

from matserial.codec._types import ElementType, ElementTypeLike
from matserial.typing import SupportsPayload


__all__ = [
    "FixedMatrix",
    "Matrix",
]


class Matrix(SupportsPayload):
    """Two-dimensional single-channel array of a given element type.

    Each of the row and column extents may be statically fixed, in
    which case the matrix may not be resized along that axis; when
    left dynamic, decoding into the matrix resizes it as required.

    Elements are stored in a C-contiguous numpy array that uses the
    element type's little-endian dtype, accessible via `data`.
    """

    def __init__(
        self,
        element_type: ElementTypeLike,
        data: Optional[ArrayLike] = None,
        fixed_rows: Optional[int] = None,
        fixed_cols: Optional[int] = None,
    ) -> None:
        """Instantiate the matrix.

        Parameters
        ----------
        element_type: ElementType or str or dtype-like
            Type of the matrix's elements.
        data: array-like or None, default=None
            Optional initial 2-d contents, which are copied (and cast
            to `element_type`). If None, fill the matrix with zeros,
            using fixed extents or zero as initial shape.
        fixed_rows: int or None, default=None
            Optional statically-fixed number of rows.
        fixed_cols: int or None, default=None
            Optional statically-fixed number of columns.

        Raises
        ------
        TypeError
            If `element_type` is not supported.
        ValueError
            If a fixed extent is negative, if `data` is not 2-d or
            if its shape does not match the fixed extents.
        """
        self._element_type = ElementType.parse(element_type)
        for name, value in (("rows", fixed_rows), ("cols", fixed_cols)):
            if value is not None and value < 0:
                raise ValueError(f"Fixed {name} may not be negative: {value}.")
        self._fixed_rows = fixed_rows
        self._fixed_cols = fixed_cols
        if data is None:
            shape = (fixed_rows or 0, fixed_cols or 0)
            data = np.zeros(shape, dtype=self._element_type.dtype)
        array = np.array(data, dtype=self._element_type.dtype, order="C")
        if array.ndim != 2:
            raise ValueError(
                f"{type(self).__name__} data must be 2-d, not {array.ndim}-d."
            )
        self._check_extents(*array.shape)
        self._data = array

    @classmethod
    def from_array(
        cls,
        array: np.ndarray,
    ) -> Self:
        """Wrap a copy of a 2-d numpy array, inferring its element type."""
        return cls(ElementType.from_dtype(array.dtype), data=array)

    @property
    def element_type(self) -> ElementType:
        return self._element_type

    @property
    def data(self) -> np.ndarray:
        """Numpy array storing the matrix's elements."""
        return self._data

    @property
    def shape(self) -> Tuple[int, int]:
        """Current (rows, cols) shape of the matrix."""
        return self._data.shape  # type: ignore

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def channels(self) -> int:
        return 1

    @property
    def fixed_rows(self) -> Optional[int]:
        return self._fixed_rows

    @property
    def fixed_cols(self) -> Optional[int]:
        return self._fixed_cols

    @property
    def fixed_channels(self) -> Optional[int]:
        return 1

    def _check_extents(
        self,
        rows: int,
        cols: int,
    ) -> None:
        """Raise a ValueError if a shape violates fixed extents."""
        if self._fixed_rows is not None and rows != self._fixed_rows:
            raise ValueError(
                f"{type(self).__name__} has a fixed number of rows "
                f"({self._fixed_rows}); cannot set it to {rows}."
            )
        if self._fixed_cols is not None and cols != self._fixed_cols:
            raise ValueError(
                f"{type(self).__name__} has a fixed number of columns "
                f"({self._fixed_cols}); cannot set it to {cols}."
            )

    def resize(
        self,
        rows: int,
        cols: int,
        channels: int = 1,
    ) -> None:
        if channels != 1:
            raise ValueError("Matrices may only have a single channel.")
        if (rows, cols) == self.shape:
            return
        self._check_extents(rows, cols)
        self._data = np.zeros((rows, cols), dtype=self._element_type.dtype)

    def raw_view(self) -> np.ndarray:
        return self._data.reshape(-1).view(np.uint8)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Matrix):
            return (self._element_type is other.element_type) and (
                np.array_equal(self._data, other.data)
            )
        return NotImplemented

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._element_type!r}, "
            f"shape={self.shape})"
        )


class FixedMatrix(Matrix):
    """Matrix with statically-fixed row and column extents.

    Decoding into a FixedMatrix fails unless the encoded shape
    matches its own, whereas a (dynamic) `Matrix` is resized.
    """

    def __init__(
        self,
        element_type: ElementTypeLike,
        rows: int,
        cols: int,
        data: Optional[ArrayLike] = None,
    ) -> None:
        super().__init__(
            element_type, data=data, fixed_rows=rows, fixed_cols=cols
        )

    @classmethod
    def from_array(
        cls,
        array: np.ndarray,
    ) -> Self:
        """Wrap a copy of a 2-d numpy array, fixing its current shape."""
        if array.ndim != 2:
            raise ValueError(
                f"{cls.__name__} data must be 2-d, not {array.ndim}-d."
            )
        rows, cols = array.shape
        return cls(ElementType.from_dtype(array.dtype), rows, cols, array)
