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

"""Scalar codec: header-less encoding of single numeric values.

Two independent paths are provided:

* A text path (`serialize_scalar_to_string`, `deserialize_scalar_from_string`)
  that writes a human-readable representation of the value. Floating-point
  values only round-trip to the precision of that text, which may be set.
* A fixed-width path (`serialize_scalar_to_buffer`,
  `deserialize_scalar_from_buffer`) that copies the value's little-endian
  bytes, and therefore round-trips bit-exactly.
"""

import math
import numbers
import re
from typing import Optional, Union

import numpy as np
from numpy.typing import DTypeLike

from matserial.codec._errors import ScalarParseError, SizeMismatchError


__all__ = [
    "deserialize_scalar_from_buffer",
    "deserialize_scalar_from_string",
    "serialize_scalar_to_buffer",
    "serialize_scalar_to_string",
]


# ASCII-only text forms accepted by the scalar text parser.
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|inf|infinity|nan)",
    re.IGNORECASE,
)


def _scalar_dtype(
    dtype: DTypeLike,
) -> np.dtype:
    """Parse a numeric scalar dtype, raising a TypeError if unsupported."""
    dtype = np.dtype(dtype)
    if dtype.kind not in "iuf":
        raise TypeError(
            f"Unsupported scalar dtype: '{dtype}'; expected an integer "
            "or floating-point one."
        )
    return dtype.newbyteorder("<")


def serialize_scalar_to_string(
    value: Union[int, float, np.number],
    precision: Optional[int] = None,
) -> str:
    """Return a text representation of a numeric scalar.

    Parameters
    ----------
    value: int or float or numpy number
        Scalar value to represent. Booleans are written as integers.
    precision: int or None, default=None
        Number of significant digits used for floating-point values.
        If None, use the shortest text that round-trips exactly.

    Raises
    ------
    TypeError
        If `value` is not a real number.
    ValueError
        If `precision` is not a positive integer.
    """
    if precision is not None and (
        isinstance(precision, bool)
        or not isinstance(precision, int)
        or precision < 1
    ):
        raise ValueError(f"Invalid scalar text precision: {precision}.")
    if isinstance(value, (numbers.Integral, np.bool_)):
        return str(int(value))
    if isinstance(value, numbers.Real):
        if precision is None:
            return repr(float(value))
        return f"{float(value):.{precision}g}"
    raise TypeError(
        f"Cannot serialize object of type '{type(value).__name__}' "
        "as a numeric scalar."
    )


def deserialize_scalar_from_string(
    string: Union[str, bytes],
    dtype: DTypeLike,
) -> np.number:
    """Parse a numeric scalar of given dtype from its text representation.

    Parameters
    ----------
    string: str or bytes
        Text representation of the scalar, e.g. as output by
        `serialize_scalar_to_string`. Surrounding blanks are ignored.
    dtype: dtype-like
        Integer or floating-point dtype of the returned scalar.

    Returns
    -------
    value: numpy.number
        Parsed scalar, as an instance of `dtype`'s scalar type.

    Raises
    ------
    ScalarParseError
        If `string` is empty, is not a valid representation of a
        number of the target kind, or if the parsed value does not
        fit within the range of `dtype`. Text explicitly naming an
        infinity is the only one that may yield an infinite float.
    TypeError
        If `dtype` is not an integer or floating-point one.
    """
    dtype = _scalar_dtype(dtype)
    if isinstance(string, bytes):
        try:
            string = string.decode("ascii")
        except UnicodeDecodeError as exc:
            raise ScalarParseError("Scalar text is not ASCII.") from exc
    text = string.strip()
    if not text:
        raise ScalarParseError("Cannot parse a scalar from empty text.")
    if dtype.kind == "f":
        if not FLOAT_PATTERN.fullmatch(text):
            raise ScalarParseError(
                f"Cannot parse a floating-point scalar from '{text}'."
            )
        with np.errstate(over="ignore"):
            result = dtype.type(float(text))
        # Only explicit "inf" text may yield an infinite value.
        if np.isinf(result) and not text.lstrip("+-").isalpha():
            raise ScalarParseError(
                f"Scalar value '{text}' is out of range for dtype '{dtype}'."
            )
        return result
    if not INTEGER_PATTERN.fullmatch(text):
        raise ScalarParseError(
            f"Cannot parse an integer scalar from '{text}'."
        )
    value = int(text)
    info = np.iinfo(dtype)
    if not info.min <= value <= info.max:
        raise ScalarParseError(
            f"Scalar value {value} is out of range for dtype '{dtype}'."
        )
    return dtype.type(value)


def serialize_scalar_to_buffer(
    value: Union[int, float, np.number],
    dtype: DTypeLike,
    size: int,
) -> bytearray:
    """Copy the little-endian bytes of a scalar into a new buffer.

    Parameters
    ----------
    value: int or float or numpy number
        Scalar value to encode, cast to `dtype`.
    dtype: dtype-like
        Integer or floating-point dtype used to encode the value.
    size: int
        Declared size of the output buffer, which must be equal to
        the byte size of `dtype`.

    Raises
    ------
    ValueError
        If `size` does not match the byte size of `dtype`, or if
        `value` cannot be represented by `dtype`, i.e. it is not
        integral or out of range for an integer one, or it is finite
        yet overflows a floating-point one.
    TypeError
        If `value` is not a real number, or if `dtype` is not an
        integer or floating-point one.
    """
    dtype = _scalar_dtype(dtype)
    if size != dtype.itemsize:
        raise ValueError(
            f"Declared size ({size}) differs from the byte size of "
            f"dtype '{dtype}' ({dtype.itemsize})."
        )
    return bytearray(_cast_scalar(value, dtype).tobytes())


def _cast_scalar(
    value: Union[int, float, np.number],
    dtype: np.dtype,
) -> np.ndarray:
    """Cast a real scalar to a dtype, raising a ValueError if lossy.

    Floating-point rounding is accepted, but float truncation into
    integers, integer overflow and finite-to-infinite casts are not.
    """
    if not isinstance(value, (numbers.Real, np.bool_)):
        raise TypeError(f"Cannot encode non-real value {value!r}.")
    if dtype.kind in "iu":
        if not isinstance(value, (numbers.Integral, np.bool_)):
            if not float(value).is_integer():
                raise ValueError(
                    f"Cannot encode non-integral value {value!r} "
                    f"as dtype '{dtype}'."
                )
        number = int(value)
        info = np.iinfo(dtype)
        if not info.min <= number <= info.max:
            raise ValueError(
                f"Scalar value {number} is out of range for dtype '{dtype}'."
            )
        return np.array(number, dtype=dtype)
    try:
        number = float(value)
    except OverflowError as exc:
        raise ValueError(
            f"Scalar value {value} is out of range for dtype '{dtype}'."
        ) from exc
    with np.errstate(over="ignore"):
        array = np.array(number, dtype=dtype)
    if math.isfinite(number) and not np.isfinite(array):
        raise ValueError(
            f"Scalar value {value} is out of range for dtype '{dtype}'."
        )
    return array


def deserialize_scalar_from_buffer(
    buffer: Union[bytes, bytearray, memoryview],
    dtype: DTypeLike,
) -> np.number:
    """Read a scalar of given dtype from its little-endian bytes.

    Raises
    ------
    SizeMismatchError
        If the buffer's length differs from the byte size of `dtype`.
    TypeError
        If `dtype` is not an integer or floating-point one.
    """
    dtype = _scalar_dtype(dtype)
    data = np.frombuffer(buffer, dtype=np.uint8)
    if data.size != dtype.itemsize:
        raise SizeMismatchError(
            f"Buffer holds {data.size} bytes, while dtype '{dtype}' "
            f"requires exactly {dtype.itemsize}."
        )
    return data.view(dtype)[0]
