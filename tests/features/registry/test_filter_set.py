"""Tests for upload listing filters."""

from datetime import date

import pytest

from upload_center.core.exceptions import ValidationError
from upload_center.features.registry import FilterSet


class TestFilterSet:
    """Test query parameter generation."""

    def test_empty_filters_send_nothing(self):
        assert FilterSet().to_params() == {}
        assert FilterSet().is_empty

    def test_blank_values_are_omitted(self):
        filters = FilterSet(search="   ", from_date="", application_id=3)
        assert filters.to_params() == {"application_id": "3"}

    def test_dates_are_iso_formatted(self):
        filters = FilterSet(from_date=date(2024, 1, 1), to_date=date(2024, 1, 31))
        assert filters.to_params() == {"from_date": "2024-01-01", "to_date": "2024-01-31"}

    def test_with_value_stores_blank_as_unset(self):
        filters = FilterSet(search="report").with_value("search", "")
        assert filters.search is None
        assert filters.is_empty

    def test_without(self):
        filters = FilterSet(search="report", location_id=4).without("search")
        assert filters.to_params() == {"location_id": "4"}

    def test_unknown_filter_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            FilterSet().with_value("owner", "jdoe")
        assert exc_info.value.field == "owner"
