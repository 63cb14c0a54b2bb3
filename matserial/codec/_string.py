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

"""String codec: immutable byte-string wrappers around the buffer codec."""

from matserial.codec._buffer import (
    deserialize_from_buffer,
    encode_header,
    encode_payload,
)
from matserial.codec._header import HEADER_SIZE
from matserial.typing import SupportsPayload


__all__ = [
    "deserialize_from_string",
    "serialize_to_string",
]


def serialize_to_string(
    value: SupportsPayload,
) -> bytes:
    """Encode a matrix or image into a byte string.

    The output uses the same layout as `serialize_to_buffer`, i.e.
    a 16-bytes header followed by the raw payload bytes, and raises
    the same ValueError if `value.raw_view()` is shorter than the
    payload. Excess trailing bytes are left out.
    """
    header = encode_header(
        value.element_type, value.rows, value.cols, value.channels
    )
    payload = encode_payload(value.raw_view(), header)
    prefix = bytearray(HEADER_SIZE)
    header.serialize_to_buffer(prefix, 0)
    return b"".join((prefix, payload.data))


def deserialize_from_string(
    string: bytes,
    destination: SupportsPayload,
) -> SupportsPayload:
    """Decode a byte string into a destination array.

    This is a thin wrapper around `deserialize_from_buffer`, with
    the same checks and exceptions; see its documentation.
    """
    if not isinstance(string, (bytes, bytearray)):
        raise TypeError(
            f"Expected a byte string, not '{type(string).__name__}'."
        )
    return deserialize_from_buffer(string, destination, len(string))
