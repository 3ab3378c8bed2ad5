"""
Tests for size conversion utilities used by the report and the --chunk-size option.
"""
import pytest
from coll.utils.convert_utils import ConvertUtils


class TestBytesToHuman:
    """Test decimal rendering of byte counts."""

    def test_small_values_are_plain_bytes(self):
        assert ConvertUtils.bytes_to_human(0) == "0 B"
        assert ConvertUtils.bytes_to_human(1) == "1 B"
        assert ConvertUtils.bytes_to_human(999) == "999 B"

    def test_kilobytes_use_powers_of_1000(self):
        assert ConvertUtils.bytes_to_human(1000) == "1.0 KB"
        assert ConvertUtils.bytes_to_human(1500) == "1.5 KB"
        assert ConvertUtils.bytes_to_human(4096) == "4.1 KB"

    def test_larger_units(self):
        assert ConvertUtils.bytes_to_human(2_500_000) == "2.5 MB"
        assert ConvertUtils.bytes_to_human(3 * 10 ** 9) == "3.0 GB"
        assert ConvertUtils.bytes_to_human(10 ** 12) == "1.0 TB"
        assert ConvertUtils.bytes_to_human(10 ** 15) == "1.0 PB"
        assert ConvertUtils.bytes_to_human(5 * 10 ** 18) == "5000.0 PB"

    def test_negative_is_zero(self):
        assert ConvertUtils.bytes_to_human(-5) == "0 B"


class TestHumanToBytes:
    """Test conversion from human-readable sizes (e.g., "64K") to bytes."""

    def test_bytes_without_suffix(self):
        assert ConvertUtils.human_to_bytes("0") == 0
        assert ConvertUtils.human_to_bytes("1024") == 1024

    def test_binary_suffixes(self):
        assert ConvertUtils.human_to_bytes("1K") == 1024
        assert ConvertUtils.human_to_bytes("1KB") == 1024
        assert ConvertUtils.human_to_bytes("1.5KB") == 1536
        assert ConvertUtils.human_to_bytes("1M") == 1024 * 1024
        assert ConvertUtils.human_to_bytes("2G") == 2 * 1024 ** 3

    def test_case_and_whitespace_insensitive(self):
        assert ConvertUtils.human_to_bytes(" 64k ") == 64 * 1024
        assert ConvertUtils.human_to_bytes("1mb") == 1024 * 1024

    def test_rejects_negative_values(self):
        with pytest.raises(ValueError, match="Negative size not allowed"):
            ConvertUtils.human_to_bytes("-1K")
        with pytest.raises(ValueError, match="Negative size not allowed"):
            ConvertUtils.human_to_bytes("-5")

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            ConvertUtils.human_to_bytes("lots")
        with pytest.raises(ValueError, match="Invalid numeric value"):
            ConvertUtils.human_to_bytes("abcKB")
