import math

import pytest

from ibrac_dashboard.utils.pagination import compute_total_pages, is_valid_page, item_range, page_slice


class TestComputeTotalPages:
    @pytest.mark.parametrize(
        "total, size, expected",
        [(0, 50, 0), (1, 50, 1), (50, 50, 1), (51, 50, 2), (237, 50, 5), (237, 25, 10)],
    )
    def test_ceiling_division(self, total, size, expected):
        assert compute_total_pages(total, size) == expected

    def test_negative_total_counts_as_empty(self):
        assert compute_total_pages(-3, 50) == 0

    def test_rejects_non_positive_page_size(self):
        with pytest.raises(ValueError):
            compute_total_pages(10, 0)


class TestIsValidPage:
    def test_bounds(self):
        assert is_valid_page(1, 5)
        assert is_valid_page(5, 5)
        assert not is_valid_page(0, 5)
        assert not is_valid_page(6, 5)
        assert not is_valid_page(-1, 5)

    def test_no_page_is_valid_when_empty(self):
        assert not is_valid_page(1, 0)

    def test_rejects_non_integral_values(self):
        assert not is_valid_page(math.nan, 5)
        assert not is_valid_page(2.5, 5)
        assert not is_valid_page("2", 5)
        assert not is_valid_page(None, 5)
        assert not is_valid_page(True, 5)

    def test_accepts_integral_float(self):
        assert is_valid_page(3.0, 5)


class TestWindows:
    def test_page_slice_is_half_open(self):
        assert page_slice(1, 50) == (0, 50)
        assert page_slice(5, 50) == (200, 250)

    def test_item_range_last_page_is_short(self):
        assert item_range(5, 50, 237) == (201, 237)

    def test_item_range_empty(self):
        assert item_range(1, 50, 0) == (0, 0)
