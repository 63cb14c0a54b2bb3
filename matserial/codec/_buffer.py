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

"""Buffer codec: header-prefixed encoding of arrays' raw element bytes.

An encoded buffer is the concatenation of a 16-bytes header (see
`HeaderInformation`) and of the array's payload, i.e. its elements'
bytes in row-major order, with cells' channels interleaved. Its
total size is thus `16 + rows * cols * channels * itemsize` bytes.

Decoding parses the header, validates it against the destination
array's static expectations and against the actual buffer length,
and only then resizes the destination and copies the payload into
it, so that failures never leave a partially-modified destination.
"""

import logging
from typing import Optional, Tuple, Union

import numpy as np

from matserial.codec._errors import (
    DecodingError,
    DimensionMismatchError,
    MalformedHeaderError,
    SizeMismatchError,
    TypeMismatchError,
)
from matserial.codec._header import (
    HEADER_SIZE,
    UINT32_MAX,
    HeaderInformation,
    make_header_information,
)
from matserial.codec._types import ElementTypeLike
from matserial.typing import SupportsPayload


__all__ = [
    "deserialize_from_buffer",
    "read_header",
    "serialize_raw",
    "serialize_to_buffer",
]


LOGGER = logging.getLogger(__name__)

# Number of leading bytes dumped to the logs upon header parsing failure.
DUMP_SIZE = 64

BufferLike = Union[bytes, bytearray, memoryview, np.ndarray]


def encode_header(
    element_type: ElementTypeLike,
    rows: int,
    cols: int,
    channels: int,
) -> HeaderInformation:
    """Validate an array's dimensions and build the matching header.

    Raises
    ------
    ValueError
        If `rows` or `cols` is negative, if `channels` is not positive,
        or if any of them exceeds the unsigned 32-bit integer range.
    TypeError
        If `element_type` is not supported.
    """
    if not (0 <= rows <= UINT32_MAX and 0 <= cols <= UINT32_MAX):
        raise ValueError(f"Invalid dimensions: rows={rows}, cols={cols}.")
    if not 1 <= channels <= UINT32_MAX:
        raise ValueError(f"Invalid number of channels: {channels}.")
    return make_header_information(element_type, rows, cols, channels)


def _as_byte_array(
    data: BufferLike,
) -> np.ndarray:
    """Return a flat uint8 numpy view over an array or bytes-like object."""
    if isinstance(data, np.ndarray):
        return np.ascontiguousarray(data).reshape(-1).view(np.uint8)
    return np.frombuffer(data, dtype=np.uint8)


def encode_payload(
    data: BufferLike,
    header: HeaderInformation,
) -> np.ndarray:
    """Return the exact payload bytes of raw data described by a header.

    Numpy arrays whose dtype only differs from the header's element
    type by its byte order are first converted to little-endian.

    Raises
    ------
    ValueError
        If `data` holds fewer bytes than the header's payload size.
    """
    if isinstance(data, np.ndarray):
        target = header.element_type.dtype
        if data.dtype != target and data.dtype.newbyteorder("<") == target:
            data = data.astype(target)
    source = _as_byte_array(data)
    payload_size = header.payload_size()
    if source.size < payload_size:
        raise ValueError(
            f"Input data holds {source.size} bytes, less than the "
            f"{payload_size} bytes required by its declared shape."
        )
    return source[:payload_size]


def serialize_raw(
    data: BufferLike,
    rows: int,
    cols: int,
    channels: int,
    element_type: ElementTypeLike,
) -> bytearray:
    """Encode raw element data into a newly-allocated buffer.

    Parameters
    ----------
    data: bytes-like or numpy.ndarray
        Raw element data, of which the first `payload_size` bytes
        are copied after the header. Numpy arrays are read in their
        C-contiguous layout, without any dtype casting, save for the
        conversion of big-endian arrays of `element_type` to little-
        endian ones.
    rows: int
        Number of rows of the encoded array.
    cols: int
        Number of columns of the encoded array.
    channels: int
        Number of interleaved components per cell.
    element_type: ElementType or str or dtype-like
        Type of the encoded elements.

    Returns
    -------
    buffer: bytearray
        Header and payload bytes, of total size `16 + payload_size`.

    Raises
    ------
    ValueError
        If dimensions are invalid, or if `data` holds fewer bytes
        than the payload size implied by dimensions and type.
    TypeError
        If `element_type` is not supported.
    """
    header = encode_header(element_type, rows, cols, channels)
    payload = encode_payload(data, header)
    buffer = bytearray(HEADER_SIZE + payload.size)
    header.serialize_to_buffer(buffer, 0)
    np.frombuffer(buffer, dtype=np.uint8)[HEADER_SIZE:] = payload
    LOGGER.debug("Encoded %s into a %s-bytes buffer.", header, len(buffer))
    return buffer


def serialize_to_buffer(
    value: SupportsPayload,
) -> bytearray:
    """Encode a matrix or image into a newly-allocated buffer.

    See `deserialize_from_buffer` for the counterpart function.

    Parameters
    ----------
    value: SupportsPayload
        Array to encode, e.g. a `matserial.arrays.Matrix` or `Image`.

    Returns
    -------
    buffer: bytearray
        Header and payload bytes, owned by the caller.
    """
    return serialize_raw(
        value.raw_view(),
        value.rows,
        value.cols,
        value.channels,
        value.element_type,
    )


def _as_sized_array(
    buffer: BufferLike,
    size: Optional[int],
) -> np.ndarray:
    """Return a flat uint8 view over the first `size` bytes of a buffer."""
    data = _as_byte_array(buffer)
    if size is None:
        return data
    if not 0 <= size <= data.size:
        raise ValueError(
            f"Declared size ({size}) exceeds the buffer's length "
            f"({data.size})."
        )
    return data[:size]


def _parse_header(
    data: np.ndarray,
) -> HeaderInformation:
    """Parse a header, logging the offending bytes upon failure."""
    try:
        return HeaderInformation.deserialize_from_buffer(data.data, 0)
    except MalformedHeaderError:
        LOGGER.error(
            "Failed to deserialize header from buffer: %s",
            data[:DUMP_SIZE].tobytes().hex(),
        )
        raise


def _check_payload_size(
    header: HeaderInformation,
    shape: Tuple[int, int, int],
    itemsize: int,
    size: int,
) -> None:
    """Raise a SizeMismatchError if a buffer's length mismatches its header."""
    rows, cols, channels = shape
    payload_size = itemsize * rows * cols * channels
    if payload_size != size - HEADER_SIZE:
        raise SizeMismatchError(
            f"Header {header} implies a {payload_size}-bytes payload, "
            f"but the buffer holds {size - HEADER_SIZE} payload bytes."
        )


def _resolve_shape(
    header: HeaderInformation,
    destination: SupportsPayload,
) -> Tuple[int, int, int]:
    """Validate a header against a destination and return the shape to use.

    Raises
    ------
    DimensionMismatchError
        If the header violates the destination's fixed rows or cols.
    TypeMismatchError
        If the header's depth tag or channels do not match expectations.
    """
    for name, fixed in (
        ("rows", destination.fixed_rows),
        ("cols", destination.fixed_cols),
    ):
        if fixed is not None and getattr(header, name) != fixed:
            raise DimensionMismatchError(
                f"Header declares {name}={getattr(header, name)}, while "
                f"the destination has a fixed number of {name} ({fixed})."
            )
    if header.depth != destination.element_type.depth:
        raise TypeMismatchError(
            f"Header declares depth tag {header.depth}, while the "
            f"destination expects {destination.element_type!r} elements "
            f"(depth tag {destination.element_type.depth})."
        )
    expected = destination.fixed_channels
    if expected is None:
        if header.channels < 1:
            raise TypeMismatchError("Header declares zero channels.")
    elif header.channels != expected:
        raise TypeMismatchError(
            f"Header declares {header.channels} channels, while the "
            f"destination expects {expected}."
        )
    return header.rows, header.cols, header.channels


def deserialize_from_buffer(
    buffer: BufferLike,
    destination: SupportsPayload,
    size: Optional[int] = None,
) -> SupportsPayload:
    """Decode an encoded buffer into a destination array.

    The destination is only resized and written to once all checks
    have passed; if any of them fails, it is left unmodified.

    Parameters
    ----------
    buffer: bytes-like or numpy.ndarray
        Encoded buffer, as output by `serialize_to_buffer`.
    destination: SupportsPayload
        Array into which to decode. Its statically-fixed extents (if
        any) and its element type must match the encoded ones. Its
        dynamic extents are resized to match the encoded shape.
    size: int or None, default=None
        Number of leading bytes of `buffer` making up for the encoded
        data. If None, use the full buffer.

    Returns
    -------
    destination: SupportsPayload
        The input destination, filled with the decoded contents.

    Raises
    ------
    MalformedHeaderError
        If the buffer is too short to hold a header.
    DimensionMismatchError
        If the header violates the destination's fixed extents.
    TypeMismatchError
        If the header's depth tag or channels do not match expectations.
    SizeMismatchError
        If the payload size implied by the header does not match the
        actual number of payload bytes.
    ValueError
        If `size` exceeds the length of `buffer`.
    """
    data = _as_sized_array(buffer, size)
    header = _parse_header(data)
    try:
        shape = _resolve_shape(header, destination)
        itemsize = destination.element_type.itemsize
        _check_payload_size(header, shape, itemsize, data.size)
    except DecodingError as exc:
        LOGGER.error("Failed to decode buffer: %s", exc)
        raise
    destination.resize(*shape)
    destination.raw_view()[:] = data[HEADER_SIZE:]
    LOGGER.debug("Decoded %s from a %s-bytes buffer.", header, data.size)
    return destination


def read_header(
    buffer: BufferLike,
    size: Optional[int] = None,
) -> HeaderInformation:
    """Parse and validate the header of an encoded buffer.

    This function performs the checks of `deserialize_from_buffer`
    that do not depend on a destination, enabling the inspection of
    encoded buffers of unknown contents.

    Raises
    ------
    MalformedHeaderError
        If the buffer is too short to hold a header.
    TypeMismatchError
        If the header's depth tag is unknown, or declares zero channels.
    SizeMismatchError
        If the payload size implied by the header does not match the
        actual number of payload bytes.
    """
    data = _as_sized_array(buffer, size)
    header = _parse_header(data)
    try:
        element_type = header.element_type
        if header.channels < 1:
            raise TypeMismatchError("Header declares zero channels.")
        shape = (header.rows, header.cols, header.channels)
        _check_payload_size(header, shape, element_type.itemsize, data.size)
    except DecodingError as exc:
        LOGGER.error("Failed to decode buffer: %s", exc)
        raise
    return header
