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

"""Numeric array types that the codecs read from and write into.

These classes implement the `matserial.typing.SupportsPayload`
protocol, i.e. the narrow interface through which the codecs
access element storage, shape metadata and element types.

* [Matrix][matserial.arrays.Matrix]:
    Single-channel 2-d array, with optionally-fixed extents.
* [FixedMatrix][matserial.arrays.FixedMatrix]:
    Single-channel 2-d array, with fixed row and column extents.
* [Image][matserial.arrays.Image]:
    Multi-channel image-like array, with fully dynamic extents.
"""

from ._image import Image
from ._matrix import FixedMatrix, Matrix
