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

"""Command-line tools to inspect and convert encoded array files.

This submodule, which is not imported by default, mainly aims at providing
with the `matserial` command-line entry-point. It exposes the following:

- [inspect_file][matserial.cli.inspect_file]:
    Read and validate the header of an encoded file.
- [encode_file][matserial.cli.encode_file]:
    Encode the contents of a `.npy` file.
- [decode_file][matserial.cli.decode_file]:
    Decode an encoded file into a `.npy` file.
"""

from ._run import decode_file, encode_file, inspect_file, main
