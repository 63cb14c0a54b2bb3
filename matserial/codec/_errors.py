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

"""Exception classes reporting on recoverable decoding failures."""


__all__ = [
    "DecodingError",
    "DimensionMismatchError",
    "MalformedHeaderError",
    "ScalarParseError",
    "SizeMismatchError",
    "TypeMismatchError",
]


class DecodingError(ValueError):
    """Base class for errors caused by invalid or incompatible input data.

    Subclasses of this exception signal conditions that are expected
    when decoding untrusted inputs, and that callers may handle. They
    are distinct from the builtin `ValueError` and `TypeError` raised
    upon caller-contract violations (e.g. negative dimensions), which
    denote programming errors.
    """


class MalformedHeaderError(DecodingError):
    """Error raised when a buffer is too short to hold a header."""


class DimensionMismatchError(DecodingError):
    """Error raised when a header violates a destination's fixed shape."""


class TypeMismatchError(DecodingError):
    """Error raised when a header's depth tag or channels are unexpected."""


class SizeMismatchError(DecodingError):
    """Error raised when a header-implied payload size is inconsistent."""


class ScalarParseError(DecodingError):
    """Error raised when text cannot be parsed into a numeric scalar."""
