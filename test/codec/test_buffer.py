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

"""Unit tests for 'matserial.codec' buffer (de)serialization functions."""

import logging
import struct

import numpy as np
import pytest

from matserial.arrays import FixedMatrix, Image, Matrix
from matserial.codec import (
    DimensionMismatchError,
    ElementType,
    MalformedHeaderError,
    SizeMismatchError,
    TypeMismatchError,
    deserialize_from_buffer,
    read_header,
    serialize_raw,
    serialize_to_buffer,
)


def build_matrix(element_type: ElementType, rows: int, cols: int) -> Matrix:
    """Build a matrix with distinct (small) values."""
    data = (np.arange(rows * cols) % 100).reshape(rows, cols)
    return Matrix(element_type, data)


class TestSerializeRaw:
    """Unit tests for 'matserial.codec.serialize_raw'."""

    def test_layout(self) -> None:
        """Test that the output is the header followed by the raw data."""
        data = np.arange(6, dtype="<i4").reshape(2, 3)
        buffer = serialize_raw(data, 2, 3, 1, ElementType.INT32)
        assert isinstance(buffer, bytearray)
        assert len(buffer) == 16 + 24
        assert bytes(buffer[:16]) == struct.pack("<4I", 2, 3, 4, 1)
        assert bytes(buffer[16:]) == data.tobytes()

    def test_bytes_input(self) -> None:
        """Test that bytes-like data is supported."""
        raw = bytes(range(12))
        buffer = serialize_raw(raw, 2, 2, 3, "uint8")
        assert bytes(buffer[16:]) == raw
        buffer = serialize_raw(memoryview(raw), 2, 2, 3, "uint8")
        assert bytes(buffer[16:]) == raw

    def test_extra_data_is_ignored(self) -> None:
        """Test that only the payload-sized prefix of the data is copied."""
        buffer = serialize_raw(bytes(range(10)), 2, 2, 1, "uint8")
        assert len(buffer) == 20
        assert bytes(buffer[16:]) == bytes(range(4))

    def test_empty_payload(self) -> None:
        """Test that arrays with no elements are encoded as a header."""
        buffer = serialize_raw(b"", 0, 5, 1, "float32")
        assert bytes(buffer) == struct.pack("<4I", 0, 5, 5, 1)

    @pytest.mark.parametrize(
        "dims", [(-1, 2, 1), (2, -1, 1), (2, 2, 0), (2**32, 1, 1)]
    )
    def test_invalid_dimensions(self, dims: tuple) -> None:
        """Test that invalid dimensions raise a ValueError."""
        with pytest.raises(ValueError):
            serialize_raw(bytes(64), *dims, "uint8")

    def test_short_data(self) -> None:
        """Test that data shorter than the payload raises a ValueError."""
        with pytest.raises(ValueError):
            serialize_raw(bytes(3), 2, 2, 1, "uint8")
        with pytest.raises(ValueError):
            serialize_raw(np.zeros(3, dtype="<f4"), 2, 2, 1, "float32")

    def test_big_endian_array(self) -> None:
        """Test that big-endian arrays are written as little-endian."""
        data = np.array([[1.5, -2.25], [3.0, 1e-3]], dtype=">f4")
        buffer = serialize_raw(data, 2, 2, 1, ElementType.FLOAT32)
        assert bytes(buffer[16:]) == data.astype("<f4").tobytes()
        destination = deserialize_from_buffer(buffer, Matrix("float32"))
        assert destination == Matrix("float32", data)

    def test_other_dtype_array_is_not_cast(self) -> None:
        """Test that arrays of another dtype are copied as raw bytes."""
        data = np.arange(4, dtype=">i4")
        buffer = serialize_raw(data, 2, 2, 1, "uint8")
        assert bytes(buffer[16:]) == data.tobytes()[:4]

    def test_unsupported_type(self) -> None:
        """Test that unsupported element types raise a TypeError."""
        with pytest.raises(TypeError):
            serialize_raw(bytes(8), 1, 1, 1, "int64")


class TestRoundTrip:
    """Unit tests for encoding then decoding arrays through buffers."""

    @pytest.mark.parametrize("element_type", list(ElementType), ids=str)
    def test_matrix(self, element_type: ElementType) -> None:
        """Test that a matrix of any element type is properly recovered."""
        source = build_matrix(element_type, 3, 4)
        buffer = serialize_to_buffer(source)
        destination = Matrix(element_type)
        output = deserialize_from_buffer(buffer, destination)
        assert output is destination
        assert destination.shape == (3, 4)
        assert destination == source

    def test_float32_fixed_matrix(self) -> None:
        """Test decoding a 3x3 float32 matrix into a same-shape FixedMatrix."""
        source = Matrix("float32", np.eye(3) * 0.5 + 0.25)
        buffer = serialize_to_buffer(source)
        destination = FixedMatrix("float32", 3, 3)
        deserialize_from_buffer(buffer, destination)
        assert destination == source
        assert np.array_equal(destination.data, source.data)

    def test_partially_fixed_matrix(self) -> None:
        """Test decoding into a matrix with fixed rows and dynamic cols."""
        source = build_matrix(ElementType.INT16, 3, 2)
        destination = Matrix("int16", fixed_rows=3)
        deserialize_from_buffer(serialize_to_buffer(source), destination)
        assert destination.shape == (3, 2)
        assert destination == source

    @pytest.mark.parametrize("shape", [(0, 0), (0, 3), (5, 0)])
    def test_empty_matrix(self, shape: tuple) -> None:
        """Test that matrices with no elements are properly recovered."""
        source = Matrix("float64", np.zeros(shape))
        buffer = serialize_to_buffer(source)
        assert len(buffer) == 16
        destination = Matrix("float64", np.ones((2, 2)))
        deserialize_from_buffer(buffer, destination)
        assert destination.shape == shape

    def test_image_channels(self) -> None:
        """Test that a 3-channel uint8 image keeps its bytes in order."""
        values = np.arange(12, dtype=np.uint8).reshape(2, 2, 3)
        source = Image("uint8", values)
        buffer = serialize_to_buffer(source)
        assert len(buffer) == 16 + 12
        assert bytes(buffer[16:]) == bytes(range(12))
        destination = Image("uint8")
        deserialize_from_buffer(buffer, destination)
        assert destination.shape == (2, 2, 3)
        assert destination.raw_view().tolist() == list(range(12))
        assert np.array_equal(destination.data, values)

    def test_image_into_matrix(self) -> None:
        """Test that a single-channel image may be decoded as a matrix."""
        source = Image("float32", np.arange(6).reshape(2, 3))
        destination = Matrix("float32")
        deserialize_from_buffer(serialize_to_buffer(source), destination)
        assert np.array_equal(destination.data, source.data[:, :, 0])

    def test_size_consistency(self) -> None:
        """Test that buffer lengths match their header's implied size."""
        for source in (
            build_matrix(ElementType.FLOAT64, 4, 5),
            Image("uint16", np.zeros((3, 2, 4))),
        ):
            buffer = serialize_to_buffer(source)
            header = read_header(buffer)
            itemsize = header.element_type.itemsize
            assert len(buffer) == 16 + (
                header.rows * header.cols * header.channels * itemsize
            )

    def test_buffer_types(self) -> None:
        """Test that various bytes-like inputs may be decoded."""
        source = build_matrix(ElementType.INT32, 2, 2)
        buffer = serialize_to_buffer(source)
        for inputs in (
            bytes(buffer),
            memoryview(buffer),
            np.frombuffer(buffer, dtype=np.uint8),
        ):
            destination = Matrix("int32")
            deserialize_from_buffer(inputs, destination)
            assert destination == source

    def test_declared_size(self) -> None:
        """Test that only the first `size` bytes of a buffer are decoded."""
        source = build_matrix(ElementType.UINT8, 2, 3)
        buffer = serialize_to_buffer(source)
        padded = bytes(buffer) + b"trailing"
        destination = Matrix("uint8")
        deserialize_from_buffer(padded, destination, size=len(buffer))
        assert destination == source
        with pytest.raises(ValueError):
            deserialize_from_buffer(buffer, destination, size=len(padded))


class TestDecodingFailures:
    """Unit tests for the rejection of invalid or incompatible buffers."""

    def test_short_input(self) -> None:
        """Test that buffers shorter than a header are rejected."""
        destination = Matrix("float32", np.ones((2, 2)))
        with pytest.raises(MalformedHeaderError):
            deserialize_from_buffer(bytes(10), destination)
        with pytest.raises(MalformedHeaderError):
            deserialize_from_buffer(bytes(32), destination, size=15)
        assert np.array_equal(destination.data, np.ones((2, 2)))

    def test_type_mismatch(self) -> None:
        """Test that a depth tag mismatch is rejected without side effects."""
        buffer = serialize_to_buffer(build_matrix(ElementType.FLOAT32, 2, 2))
        destination = Matrix("float64", np.ones((1, 1)))
        with pytest.raises(TypeMismatchError):
            deserialize_from_buffer(buffer, destination)
        assert destination.shape == (1, 1)
        assert destination.data[0, 0] == 1.0

    def test_fixed_rows_mismatch(self) -> None:
        """Test that a 3-rows buffer is not decoded into a 4-rows matrix."""
        buffer = serialize_to_buffer(build_matrix(ElementType.INT32, 3, 2))
        destination = FixedMatrix("int32", 4, 2, np.full((4, 2), 7))
        with pytest.raises(DimensionMismatchError):
            deserialize_from_buffer(buffer, destination)
        assert np.array_equal(destination.data, np.full((4, 2), 7))

    def test_fixed_cols_mismatch(self) -> None:
        """Test that a fixed number of columns is enforced."""
        buffer = serialize_to_buffer(build_matrix(ElementType.INT32, 3, 2))
        destination = Matrix("int32", fixed_cols=5)
        with pytest.raises(DimensionMismatchError):
            deserialize_from_buffer(buffer, destination)
        assert destination.shape == (0, 5)

    def test_channels_mismatch(self) -> None:
        """Test that multi-channel data is not decoded into a matrix."""
        buffer = serialize_to_buffer(Image("uint8", np.zeros((2, 2, 3))))
        destination = Matrix("uint8")
        with pytest.raises(TypeMismatchError):
            deserialize_from_buffer(buffer, destination)
        assert destination.shape == (0, 0)

    def test_zero_channels(self) -> None:
        """Test that headers declaring zero channels are rejected."""
        buffer = struct.pack("<4I", 0, 0, 0, 0)
        with pytest.raises(TypeMismatchError):
            deserialize_from_buffer(buffer, Image("uint8"))
        with pytest.raises(TypeMismatchError):
            read_header(buffer)

    def test_size_mismatch(self) -> None:
        """Test that payloads of unexpected length are rejected."""
        buffer = serialize_to_buffer(build_matrix(ElementType.UINT16, 2, 2))
        destination = Matrix("uint16")
        with pytest.raises(SizeMismatchError):
            deserialize_from_buffer(bytes(buffer) + b"\x00", destination)
        with pytest.raises(SizeMismatchError):
            deserialize_from_buffer(bytes(buffer[:-1]), destination)
        assert destination.shape == (0, 0)

    def test_failures_are_logged(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that decoding failures are logged at ERROR level."""
        with caplog.at_level(logging.ERROR, logger="matserial"):
            with pytest.raises(MalformedHeaderError):
                deserialize_from_buffer(b"\xab\xcd", Matrix("uint8"))
        assert "Failed to deserialize header" in caplog.text
        assert "abcd" in caplog.text


class TestReadHeader:
    """Unit tests for 'matserial.codec.read_header'."""

    def test_read_header(self) -> None:
        """Test that a valid header is returned."""
        buffer = serialize_to_buffer(Image("int8", np.zeros((4, 3, 2))))
        header = read_header(buffer)
        assert (header.rows, header.cols, header.channels) == (4, 3, 2)
        assert header.element_type is ElementType.INT8

    def test_unknown_depth(self) -> None:
        """Test that unknown depth tags are rejected."""
        buffer = struct.pack("<4I", 1, 1, 42, 1) + b"\x00"
        with pytest.raises(TypeMismatchError):
            read_header(buffer)

    def test_size_mismatch(self) -> None:
        """Test that inconsistent buffer lengths are rejected."""
        buffer = struct.pack("<4I", 2, 2, 0, 1) + b"\x00" * 3
        with pytest.raises(SizeMismatchError):
            read_header(buffer)
        with pytest.raises(MalformedHeaderError):
            read_header(b"\x00" * 8)
