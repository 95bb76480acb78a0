"""
Tests for column name normalization and edit-distance similarity.
"""

import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from alignment.normalization import (
    as_percentage,
    calculate_string_similarity,
    normalize_column_name,
)


class TestNormalizeColumnName:
    """Canonical comparison keys for column names."""

    @pytest.mark.parametrize("name, expected", [
        ("Customer_ID", "customerid"),
        ("customerid", "customerid"),
        ("First Name", "firstname"),
        ("e-mail  address", "emailaddress"),
        ("Amount ($)", "amount"),
        ("order__date--2023", "orderdate2023"),
        ("Straße", "strae"),
    ])
    def test_normalizes(self, name, expected):
        assert normalize_column_name(name) == expected

    def test_separator_only_names_normalize_to_empty(self):
        assert normalize_column_name("___") == ""
        assert normalize_column_name("- -") == ""
        assert normalize_column_name("") == ""

    def test_differently_styled_names_are_identical(self):
        assert normalize_column_name("Customer_ID") == normalize_column_name("customer-id")
        assert normalize_column_name("CUSTOMER ID") == normalize_column_name("customerId")


class TestStringSimilarity:
    """Levenshtein similarity on normalized names."""

    def test_identical_after_normalization(self):
        assert calculate_string_similarity("Customer_ID", "customerid") == 1.0

    def test_both_empty_is_identical(self):
        assert calculate_string_similarity("___", "---") == 1.0

    def test_one_empty(self):
        assert calculate_string_similarity("abc", "___") == 0.0

    def test_transposed_letters_count_as_two_edits(self):
        # "emial" -> "email" needs two substitutions over five characters
        assert calculate_string_similarity("Emial", "Email") == pytest.approx(0.6)

    def test_single_missing_character(self):
        # "customernam" vs "customername": one insertion over twelve characters
        assert calculate_string_similarity("customer_nam", "Customer Name") == pytest.approx(11 / 12)

    def test_is_symmetric(self):
        assert calculate_string_similarity("order_total", "total") == pytest.approx(
            calculate_string_similarity("total", "order_total")
        )

    def test_completely_different(self):
        assert calculate_string_similarity("xyz123", "qqqzzz") < 0.2


class TestAsPercentage:

    def test_rounds_half_up(self):
        assert as_percentage(0.125) == 13
        assert as_percentage(0.135) == 14

    def test_rounds_to_nearest(self):
        assert as_percentage(11 / 12) == 92
        assert as_percentage(1 / 3) == 33
        assert as_percentage(1.0) == 100
        assert as_percentage(0.0) == 0
