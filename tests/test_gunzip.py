"""Tests for the recursive gunzip pipeline."""

import gzip

import pytest

from storagefs.errors import DecompressionError
from storagefs.gunzip import gunzip, is_gzipped


def _wrap(data: bytes, layers: int) -> bytes:
    for _ in range(layers):
        data = gzip.compress(data)
    return data


class TestGunzip:
    """Tests for gunzip."""

    def test_plain_data_unchanged(self):
        assert gunzip(b'{"a": 1}') == b'{"a": 1}'

    def test_empty_data(self):
        assert gunzip(b"") == b""

    @pytest.mark.parametrize("layers", [1, 2, 3])
    def test_unwraps_every_layer(self, layers):
        assert gunzip(_wrap(b"payload", layers)) == b"payload"

    def test_depth_cap(self):
        with pytest.raises(DecompressionError):
            gunzip(_wrap(b"payload", 3), max_depth=2)

    def test_exact_depth_allowed(self):
        assert gunzip(_wrap(b"payload", 2), max_depth=2) == b"payload"

    def test_truncated_layer_raises(self):
        with pytest.raises((OSError, EOFError)):
            gunzip(gzip.compress(b"payload")[:-4])


class TestIsGzipped:
    """Tests for magic-number detection."""

    def test_detects_magic(self):
        assert is_gzipped(gzip.compress(b"x"))

    def test_plain_bytes(self):
        assert not is_gzipped(b"plain")
        assert not is_gzipped(b"\x1f")
