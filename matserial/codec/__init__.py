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

"""Binary codecs for matrices, image-like arrays and numeric scalars.

Arrays are encoded as a fixed-size 16-bytes header, followed by the
raw bytes of their elements. The header holds four little-endian
unsigned 32-bit integers: rows, cols, depth (element type tag) and
channels. Decoding validates the header against the destination's
expectations and against the actual buffer length before copying.

Element types
-------------
* [ElementType][matserial.codec.ElementType]:
    Enumeration of supported element types, with depth tags and dtypes.

Header codec
------------
* [HeaderInformation][matserial.codec.HeaderInformation]:
    Dataclass holding header fields, with (de)serialization methods.
* [make_header_information][matserial.codec.make_header_information]:
    Build the header describing an array's shape and element type.
* [read_header][matserial.codec.read_header]:
    Parse and validate the header of an encoded buffer.

Buffer and string codecs
------------------------
* [serialize_raw][matserial.codec.serialize_raw]:
    Encode raw element data, given its shape and type, into a buffer.
* [serialize_to_buffer][matserial.codec.serialize_to_buffer]
  and [deserialize_from_buffer][matserial.codec.deserialize_from_buffer]:
    Encode an array into a bytearray, and decode one into an array.
* [serialize_to_string][matserial.codec.serialize_to_string]
  and [deserialize_from_string][matserial.codec.deserialize_from_string]:
    Encode an array into a byte string, and decode one into an array.

Scalar codec
------------
* [serialize_scalar_to_string][matserial.codec.serialize_scalar_to_string]
  and
  [deserialize_scalar_from_string][matserial.codec.deserialize_scalar_from_string]:
    Lossy text (de)serialization of single numeric values.
* [serialize_scalar_to_buffer][matserial.codec.serialize_scalar_to_buffer]
  and
  [deserialize_scalar_from_buffer][matserial.codec.deserialize_scalar_from_buffer]:
    Bit-exact fixed-width (de)serialization of single numeric values.

Errors
------
* [DecodingError][matserial.codec.DecodingError]:
    Base class for recoverable errors caused by invalid input data.
    Subclasses: MalformedHeaderError, DimensionMismatchError,
    TypeMismatchError, SizeMismatchError and ScalarParseError.
"""

from ._errors import (
    DecodingError,
    DimensionMismatchError,
    MalformedHeaderError,
    ScalarParseError,
    SizeMismatchError,
    TypeMismatchError,
)
from ._types import ElementType, ElementTypeLike
from ._header import (
    HEADER_SIZE,
    HeaderInformation,
    make_header_information,
)
from ._buffer import (
    deserialize_from_buffer,
    read_header,
    serialize_raw,
    serialize_to_buffer,
)
from ._string import (
    deserialize_from_string,
    serialize_to_string,
)
from ._scalar import (
    deserialize_scalar_from_buffer,
    deserialize_scalar_from_string,
    serialize_scalar_to_buffer,
    serialize_scalar_to_string,
)
