"""Tests for the Streamlit property search page."""

from unittest import mock

import pandas as pd
import pytest

from config.settings import Settings
from core.exceptions import InvalidFilterValue
from ui.property_search_page import PropertySearchRenderer, criteria_from_form


class TestCriteriaFromForm:
    def test_empty_form(self):
        assert criteria_from_form("", None, None, None, None) == {
            "city": None,
            "owner_id": None,
            "minimum_price_per_night": None,
            "maximum_price_per_night": None,
            "minimum_rating": None,
        }

    def test_values_are_mapped(self):
        criteria = criteria_from_form("  van ", 2.0, 0.0, 150.0, 4.0)

        assert criteria["city"] == "van"
        assert criteria["owner_id"] == 2
        assert isinstance(criteria["owner_id"], int)
        assert criteria["minimum_price_per_night"] == 0.0
        assert criteria["maximum_price_per_night"] == 150.0
        assert criteria["minimum_rating"] == 4.0


@pytest.fixture
def mock_st():
    with mock.patch("ui.property_search_page.st") as st:
        st.text_input.return_value = "van"
        # owner, min price, max price, rating, limit
        st.number_input.side_effect = [None, None, None, 4.0, 5]
        st.form_submit_button.return_value = True
        yield st


def _row(property_id, title, cost, rating):
    return {
        "id": property_id,
        "title": title,
        "city": "Vancouver",
        "province": "BC",
        "cost_per_night": cost,
        "number_of_bedrooms": 2,
        "average_rating": rating,
        "description": "not displayed",
    }


class TestPropertySearchRenderer:
    def test_not_submitted_shows_hint(self, mock_st):
        mock_st.form_submit_button.return_value = False
        repository = mock.MagicMock()

        PropertySearchRenderer(repository).render()

        repository.get_all_properties.assert_not_called()
        mock_st.info.assert_called_once()

    def test_submitted_queries_repository_and_shows_table(self, mock_st):
        repository = mock.MagicMock()
        repository.get_all_properties.return_value = [_row(1, "Cozy Loft", 8000, 4.5)]

        PropertySearchRenderer(repository).render()

        repository.get_all_properties.assert_called_once_with(
            {
                "city": "van",
                "owner_id": None,
                "minimum_price_per_night": None,
                "maximum_price_per_night": None,
                "minimum_rating": 4.0,
            },
            5,
        )
        shown = mock_st.dataframe.call_args[0][0]
        assert isinstance(shown, pd.DataFrame)
        assert list(shown.columns) == [
            "id", "title", "city", "province", "price_per_night", "number_of_bedrooms", "average_rating"
        ]
        assert shown.iloc[0]["price_per_night"] == 80.0

    def test_no_results_warns(self, mock_st):
        repository = mock.MagicMock()
        repository.get_all_properties.return_value = []

        PropertySearchRenderer(repository).render()

        mock_st.warning.assert_called_once()
        mock_st.dataframe.assert_not_called()

    def test_invalid_filter_shows_error(self, mock_st):
        repository = mock.MagicMock()
        repository.get_all_properties.side_effect = InvalidFilterValue("minimum_rating", "x")

        PropertySearchRenderer(repository).render()

        assert "minimum_rating" in mock_st.error.call_args[0][0]
        mock_st.dataframe.assert_not_called()

    def test_limit_input_is_bounded_by_settings(self, mock_st):
        repository = mock.MagicMock()
        repository.get_all_properties.return_value = []

        PropertySearchRenderer(repository).render()

        limit_call = next(c for c in mock_st.number_input.call_args_list if c.args[0] == "Max results")
        assert limit_call.kwargs["max_value"] == Settings.MAX_RESULT_LIMIT
        assert limit_call.kwargs["value"] == Settings.DEFAULT_RESULT_LIMIT
