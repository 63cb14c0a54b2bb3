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

"""Matserial - binary encoding of matrices, images and numeric scalars.

Matserial moves two-dimensional numeric data (single-channel matrices
and multi-channel image-like arrays) across process, network or storage
boundaries, as a fixed-size header describing shape and element type,
followed by the raw element bytes. Decoding restores the exact shape
and element type, after validating the header against expectations.

The package is organized into the following submodules:
* arrays:
    Matrix and image value types that codecs read from and write into.
* codec:
    Header, buffer, string and scalar codecs, and their error classes.
* config:
    TOML-parsable configuration of tunable behaviours.
* typing:
    Type hinting utils, defined and exposed for code readability purposes.
* utils:
    Shared utils used across matserial.

The `matserial.cli` submodule, which backs the `matserial` command-line
entry-point, is not imported by default.
"""

from . import (
    arrays,
    codec,
    config,
    typing,
    utils,
)

__version__ = "1.0.0"
