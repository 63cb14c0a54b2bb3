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

"""Fixed-size header describing the shape and type of an encoded array.

The header is made of four little-endian unsigned 32-bit integers,
written in the following order: rows, cols, depth, channels. It is
immediately followed by the payload, without padding, so that the
header size (16 bytes) never varies with the encoded contents.

There is no magic number nor checksum: a foreign buffer can only be
told apart from a valid one by the downstream shape and size checks.
"""

import dataclasses
import struct
from typing import Union

from typing_extensions import Self  # future: import from typing (Py>=3.11)

from matserial.codec._errors import MalformedHeaderError
from matserial.codec._types import ElementType, ElementTypeLike


__all__ = [
    "HEADER_SIZE",
    "HeaderInformation",
    "make_header_information",
]


HEADER_FORMAT = struct.Struct("<4I")
HEADER_SIZE = HEADER_FORMAT.size
UINT32_MAX = 2**32 - 1

BytesLike = Union[bytes, bytearray, memoryview]


@dataclasses.dataclass
class HeaderInformation:
    """Metadata record written ahead of an encoded array's payload.

    Attributes
    ----------
    rows: int
        Number of rows of the encoded array.
    cols: int
        Number of columns of the encoded array.
    depth: int
        Tag identifying the element type (see `ElementType.depth`).
    channels: int
        Number of interleaved scalar components per cell.
    """

    rows: int
    cols: int
    depth: int
    channels: int

    @staticmethod
    def size() -> int:
        """Return the fixed encoded size of a header, in bytes."""
        return HEADER_SIZE

    @property
    def element_type(self) -> ElementType:
        """Element type matching this header's depth tag.

        Raises a TypeMismatchError if the depth tag is unknown.
        """
        return ElementType.from_depth(self.depth)

    def payload_size(self) -> int:
        """Return the payload size (in bytes) this header implies."""
        return (
            self.element_type.itemsize * self.rows * self.cols * self.channels
        )

    def serialize_to_buffer(
        self,
        buffer: Union[bytearray, memoryview],
        offset: int = 0,
    ) -> None:
        """Write this header's fields to a writable buffer.

        Parameters
        ----------
        buffer: bytearray or memoryview
            Writable buffer, holding at least `offset + self.size()` bytes.
        offset: int, default=0
            Position in `buffer` at which to write the header.

        Raises
        ------
        ValueError
            If the buffer is too short, or a field does not fit in
            an unsigned 32-bit integer.
        """
        if len(buffer) < offset + HEADER_SIZE:
            raise ValueError(
                f"Cannot write a {HEADER_SIZE}-bytes header at offset "
                f"{offset} of a {len(buffer)}-bytes buffer."
            )
        for name, value in dataclasses.asdict(self).items():
            if not 0 <= value <= UINT32_MAX:
                raise ValueError(
                    f"Header field '{name}' does not fit in an unsigned "
                    f"32-bit integer: {value}."
                )
        HEADER_FORMAT.pack_into(
            buffer, offset, self.rows, self.cols, self.depth, self.channels
        )

    @classmethod
    def deserialize_from_buffer(
        cls,
        buffer: BytesLike,
        offset: int = 0,
    ) -> Self:
        """Read a header from a buffer.

        Parameters
        ----------
        buffer: bytes or bytearray or memoryview
            Buffer from which to read the header.
        offset: int, default=0
            Position in `buffer` at which the header starts.

        Raises
        ------
        MalformedHeaderError
            If the buffer is shorter than `offset + cls.size()`.
        """
        if len(buffer) < offset + HEADER_SIZE:
            raise MalformedHeaderError(
                f"Cannot read a {HEADER_SIZE}-bytes header at offset "
                f"{offset} of a {len(buffer)}-bytes buffer."
            )
        rows, cols, depth, channels = HEADER_FORMAT.unpack_from(buffer, offset)
        return cls(rows=rows, cols=cols, depth=depth, channels=channels)


def make_header_information(
    element_type: ElementTypeLike,
    rows: int,
    cols: int,
    channels: int,
) -> HeaderInformation:
    """Build the header describing an array's shape and element type.

    Parameters
    ----------
    element_type: ElementType or str or dtype-like
        Type of the array's elements, from which the depth tag is set.
    rows: int
        Number of rows of the array.
    cols: int
        Number of columns of the array.
    channels: int
        Number of interleaved components per cell.

    Raises
    ------
    TypeError
        If `element_type` is not a supported element type.
    """
    element_type = ElementType.parse(element_type)
    return HeaderInformation(
        rows=rows, cols=cols, depth=element_type.depth, channels=channels
    )
