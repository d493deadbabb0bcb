"""Tests for the pixel density parser."""

import pytest

from responsive_images.errors import InvalidPixelDensity
from responsive_images.parser import parse_pixel_densities
from responsive_images.parser.densities import loose_float


class TestParsePixelDensities:
    def test_basic_list(self):
        assert parse_pixel_densities("1, 2, 1.5") == [1.0, 2.0, 1.5]

    def test_empty_string(self):
        assert parse_pixel_densities("") == []

    def test_empty_segments_skipped(self):
        assert parse_pixel_densities("1,,2,") == [1.0, 2.0]

    def test_duplicates_preserved(self):
        assert parse_pixel_densities("2,1,2") == [2.0, 1.0, 2.0]

    def test_zero_segment_skipped(self):
        assert parse_pixel_densities("0,2") == [2.0]

    def test_zero_skipped_after_trimming_only_when_exact(self):
        assert parse_pixel_densities("1, 0 ,0.0") == [1.0, 0.0]


class TestLooseConversion:
    def test_non_numeric_becomes_zero(self):
        assert parse_pixel_densities("abc, 2") == [0.0, 2.0]

    def test_leading_number_used(self):
        assert parse_pixel_densities("1.5x") == [1.5]

    @pytest.mark.parametrize(
        "value, expected",
        [("3", 3.0), (" .5 ", 0.5), ("2e0", 2.0), ("-1", -1.0), ("x2", 0.0)],
    )
    def test_loose_float(self, value, expected):
        assert loose_float(value) == expected


class TestStrictConversion:
    def test_valid_list(self):
        assert parse_pixel_densities("1, 2", strict=True) == [1.0, 2.0]

    def test_non_numeric_raises(self):
        with pytest.raises(InvalidPixelDensity) as exc_info:
            parse_pixel_densities("1, 2x", strict=True)
        assert exc_info.value.value == "2x"

    def test_negative_raises(self):
        with pytest.raises(InvalidPixelDensity):
            parse_pixel_densities("-2", strict=True)
