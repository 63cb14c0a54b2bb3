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

The `matserial` entry-point exposes the following commands:

* `inspect PATH`: print the header of an encoded file.
* `encode SRC DST`: encode the contents of a `.npy` file.
* `decode SRC DST`: decode an encoded file into a `.npy` file.
"""

import logging
from typing import Any, Dict, Optional

import fire  # type: ignore
import numpy as np

from matserial.arrays import Image, Matrix
from matserial.codec import (
    deserialize_from_buffer,
    deserialize_scalar_from_string,
    read_header,
    serialize_scalar_to_string,
    serialize_to_buffer,
)
from matserial.config import CodecConfig
from matserial.utils import get_logger

__all__ = [
    "decode_file",
    "encode_file",
    "inspect_file",
]


def setup_config(
    config: Optional[str] = None,
) -> CodecConfig:
    """Parse an optional TOML config file and set up logging accordingly."""
    cfg = CodecConfig.from_toml(config) if config else CodecConfig()
    get_logger("matserial", cfg.logging.level, cfg.logging.fpath)
    return cfg


def inspect_file(
    path: str,
    config: Optional[str] = None,
) -> Dict[str, Any]:
    """Read and validate the header of an encoded file.

    Parameters
    ----------
    path: str
        Path to a file holding an encoded matrix or image.
    config: str or None, default=None
        Optional path to a TOML configuration file.

    Returns
    -------
    header: dict[str, any]
        Header fields, completed with the element type's name
        and the payload size (in bytes).
    """
    setup_config(config)
    with open(path, "rb") as file:
        header = read_header(file.read())
    return {
        "rows": header.rows,
        "cols": header.cols,
        "depth": header.depth,
        "element_type": header.element_type.name,
        "channels": header.channels,
        "payload_size": header.payload_size(),
    }


def encode_file(
    src: str,
    dst: str,
    config: Optional[str] = None,
) -> None:
    """Encode the contents of a `.npy` file.

    2-d arrays are encoded as matrices, 3-d ones as images (with
    channels as last axis), and 0-d ones as scalar text.

    Parameters
    ----------
    src: str
        Path to the source `.npy` file.
    dst: str
        Path to the output file.
    config: str or None, default=None
        Optional path to a TOML configuration file.
    """
    cfg = setup_config(config)
    logger = logging.getLogger("matserial")
    array = np.load(src, allow_pickle=False)
    if array.ndim == 0:
        text = serialize_scalar_to_string(array[()], cfg.scalar.precision)
        with open(dst, "w", encoding="ascii") as file:
            file.write(text)
        logger.info("Encoded scalar from '%s' as text to '%s'.", src, dst)
        return
    if array.ndim == 2:
        value = Matrix.from_array(array)  # type: Any
    elif array.ndim == 3:
        value = Image.from_array(array)
    else:
        raise ValueError(
            f"Cannot encode a {array.ndim}-d array: expected 0, 2 or 3 dims."
        )
    with open(dst, "wb") as file:
        file.write(serialize_to_buffer(value))
    logger.info("Encoded %s from '%s' to '%s'.", value, src, dst)


def decode_file(
    src: str,
    dst: str,
    scalar: Optional[str] = None,
    config: Optional[str] = None,
) -> None:
    """Decode an encoded file and save its contents as a `.npy` file.

    Parameters
    ----------
    src: str
        Path to the encoded file.
    dst: str
        Path to the output `.npy` file.
    scalar: str or None, default=None
        If set, treat `src` as scalar text and parse it into this
        numpy dtype. Otherwise, decode it as an image of the element
        type declared by its header, saved as a (rows, cols, channels)
        array.
    config: str or None, default=None
        Optional path to a TOML configuration file.
    """
    setup_config(config)
    logger = logging.getLogger("matserial")
    if scalar is not None:
        with open(src, "r", encoding="ascii") as file:
            value = deserialize_scalar_from_string(file.read(), scalar)
        np.save(dst, np.asarray(value))
        logger.info("Decoded scalar from '%s' to '%s'.", src, dst)
        return
    with open(src, "rb") as file:
        buffer = file.read()
    image = Image(read_header(buffer).element_type)
    deserialize_from_buffer(buffer, image)
    np.save(dst, image.data)
    logger.info("Decoded %s from '%s' to '%s'.", image, src, dst)


def main() -> None:
    """Fire-wrapped command-line entry-point."""
    fire.Fire(
        {
            "inspect": inspect_file,
            "encode": encode_file,
            "decode": decode_file,
        }
    )


if __name__ == "__main__":
    main()
