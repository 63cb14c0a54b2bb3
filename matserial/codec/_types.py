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

"""Sealed enumeration of supported element types and their depth tags."""

import enum
from typing import Union

import numpy as np
from numpy.typing import DTypeLike

from matserial.codec._errors import TypeMismatchError


__all__ = [
    "ElementType",
    "ElementTypeLike",
]


class ElementType(enum.Enum):
    """Enumeration of the scalar element types that may be encoded.

    Each member wraps a `(depth, dtype)` pair, where `depth` is the
    numeric tag written to headers to identify the element type, and
    `dtype` is the (explicitly little-endian) numpy dtype with which
    payload bytes are written and read.

    Depth tags match OpenCV's `CV_<bits><type>` depth codes, so that
    buffers remain interpretable by peers relying on that convention.
    """

    UINT8 = (0, "<u1")
    INT8 = (1, "<i1")
    UINT16 = (2, "<u2")
    INT16 = (3, "<i2")
    INT32 = (4, "<i4")
    FLOAT32 = (5, "<f4")
    FLOAT64 = (6, "<f8")
    FLOAT16 = (7, "<f2")

    @property
    def depth(self) -> int:
        """Depth tag identifying this element type in headers."""
        return self.value[0]

    @property
    def dtype(self) -> np.dtype:
        """Little-endian numpy dtype of elements of this type."""
        return np.dtype(self.value[1])

    @property
    def itemsize(self) -> int:
        """Size of a single element, in bytes."""
        return self.dtype.itemsize

    @classmethod
    def from_dtype(
        cls,
        dtype: DTypeLike,
    ) -> "ElementType":
        """Return the element type matching a given numpy dtype.

        Byte order is disregarded: both '<f4' and '>f4' map to FLOAT32.

        Raises
        ------
        TypeError
            If `dtype` does not match any supported element type.
        """
        if dtype is None:
            raise TypeError("Element dtype may not be None.")
        try:
            dtype = np.dtype(dtype)
        except TypeError as exc:
            raise TypeError(
                f"Invalid dtype specification: '{dtype}'."
            ) from exc
        for member in cls:
            if member.dtype.kind == dtype.kind and (
                member.itemsize == dtype.itemsize
            ):
                return member
        raise TypeError(f"Unsupported element dtype: '{dtype}'.")

    @classmethod
    def from_depth(
        cls,
        depth: int,
    ) -> "ElementType":
        """Return the element type matching a given depth tag.

        Raises
        ------
        TypeMismatchError
            If `depth` is not a known depth tag. As depth tags are read
            from (possibly untrusted) headers, this is a data error.
        """
        for member in cls:
            if member.depth == depth:
                return member
        raise TypeMismatchError(f"Unknown element depth tag: {depth}.")

    @classmethod
    def parse(
        cls,
        value: "ElementTypeLike",
    ) -> "ElementType":
        """Parse an ElementType from a member, a member name or a dtype."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.upper() in cls.__members__:
            return cls[value.upper()]
        return cls.from_dtype(value)

    def __repr__(self) -> str:
        return f"ElementType.{self.name}"


ElementTypeLike = Union[ElementType, DTypeLike]
