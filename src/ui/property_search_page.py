"""
Property Search Page

Sidebar filter form over the property repository, results as a table.

Run with:
    streamlit run src/ui/property_search_page.py
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import streamlit as st

_SRC_DIR = Path(__file__).resolve().parent.parent
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from config.settings import Settings  # noqa: E402
from core.dependencies import DependencyContainer  # noqa: E402
from core.exceptions import InvalidFilterValue  # noqa: E402
from data.repositories.property_repository import PropertyRepository  # noqa: E402

DISPLAY_COLUMNS = ["id", "title", "city", "province", "price_per_night", "number_of_bedrooms", "average_rating"]


def criteria_from_form(
    city: Optional[str],
    owner_id: Optional[float],
    min_price: Optional[float],
    max_price: Optional[float],
    min_rating: Optional[float],
) -> Dict[str, Any]:
    """Map form widget values to filter criteria; empty widgets report None or ""."""
    return {
        "city": (city or "").strip() or None,
        "owner_id": int(owner_id) if owner_id is not None else None,
        "minimum_price_per_night": min_price,
        "maximum_price_per_night": max_price,
        "minimum_rating": min_rating,
    }


class PropertySearchRenderer:
    """Renders the property search form and results."""

    def __init__(self, repository: PropertyRepository):
        self.repository = repository

    @staticmethod
    def _results_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
        df = pd.DataFrame(rows)
        df["price_per_night"] = df["cost_per_night"] / 100
        return df[[c for c in DISPLAY_COLUMNS if c in df.columns]]

    def _render_filter_form(self) -> Optional[Dict[str, Any]]:
        with st.sidebar.form("property_filters"):
            st.subheader("🔎 Filters")
            city = st.text_input("City contains")
            owner_id = st.number_input("Owner id", min_value=1, value=None, step=1)
            min_price = st.number_input("Minimum price per night ($)", min_value=0.0, value=None)
            max_price = st.number_input("Maximum price per night ($)", min_value=0.0, value=None)
            min_rating = st.number_input("Minimum rating", min_value=0.0, max_value=5.0, value=None)
            limit = st.number_input(
                "Max results",
                min_value=1,
                max_value=Settings.MAX_RESULT_LIMIT,
                value=Settings.DEFAULT_RESULT_LIMIT,
                step=1,
            )
            submitted = st.form_submit_button("Search")

        if not submitted:
            return None
        return {
            "criteria": criteria_from_form(city, owner_id, min_price, max_price, min_rating),
            "limit": int(limit),
        }

    def render(self) -> None:
        st.header("🏠 Property Search")
        request = self._render_filter_form()
        if request is None:
            st.info("Set filters in the sidebar and press Search.")
            return

        try:
            rows = self.repository.get_all_properties(request["criteria"], request["limit"])
        except InvalidFilterValue as e:
            st.error(f"Invalid filter: {e}")
            return

        if not rows:
            st.warning("No properties match these filters.")
            return

        st.caption(f"{len(rows)} properties, cheapest first")
        st.dataframe(self._results_frame(rows), use_container_width=True, hide_index=True)


def main() -> None:
    st.set_page_config(page_title="LightBnB", page_icon="🏠", layout="wide")
    container = DependencyContainer()
    PropertySearchRenderer(container.property_repository).render()


if __name__ == "__main__":
    main()
