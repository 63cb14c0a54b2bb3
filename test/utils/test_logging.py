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

"""Unit tests for 'matserial.utils.get_logger'."""

import logging
import os
import uuid
from pathlib import Path
from typing import Iterator

import pytest

from matserial.utils import get_logger


@pytest.fixture(name="name")
def name_fixture() -> Iterator[str]:
    """Return a unique logger name, and clean its handlers up afterwards."""
    name = f"matserial-test-{uuid.uuid4().hex}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_get_logger_stream_handler(name: str) -> None:
    """Test that a single stream handler is set up, even on repeated calls."""
    logger = get_logger(name, level=logging.DEBUG)
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert get_logger(name, level="warning") is logger
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_get_logger_file_handler(name: str, tmp_path: Path) -> None:
    """Test that records are appended to a file when a path is provided."""
    fpath = os.path.join(tmp_path, "logs", "logs.txt")
    logger = get_logger(name, fpath=fpath)
    get_logger(name, fpath=fpath)
    assert len(logger.handlers) == 2
    logger.info("lorem ipsum")
    for handler in logger.handlers:
        handler.flush()
    with open(fpath, "r", encoding="utf-8") as file:
        content = file.read()
    assert content.count("lorem ipsum") == 1
    assert f":{name}:INFO: lorem ipsum" in content


def test_get_logger_invalid_level(name: str) -> None:
    """Test that unknown level names raise a ValueError."""
    with pytest.raises(ValueError):
        get_logger(name, level="not-a-level")
