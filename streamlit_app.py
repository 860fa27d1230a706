"""Streamlit front-end for the CiSaMe query forge."""

from __future__ import annotations

import streamlit as st

from cisame_query.app.app import QueryForgeApp
from cisame_query.core import DEFAULT_LIMITS, QueryMode, SearchAttribute, VariationStrategy

_ATTRIBUTES = [SearchAttribute.LEMMA.value, SearchAttribute.WORD.value]
_STRATEGIES = [strategy.value for strategy in VariationStrategy]
_CONTEXT_MODES = {
    "At least one context lemma": QueryMode.SEMANTIC_ANY,
    "One pairing per context lemma": QueryMode.SEMANTIC_PHRASE,
    "Every pair of context lemmas": QueryMode.SEMANTIC_ALL,
}


@st.cache_resource(show_spinner=False)
def _load_app() -> QueryForgeApp:
    """Initialise and cache the application facade."""

    return QueryForgeApp()


def _distance(key: str, value: int) -> int:
    return st.slider(
        "Maximum distance (tokens)",
        min_value=DEFAULT_LIMITS.minimum,
        max_value=DEFAULT_LIMITS.maximum,
        value=value,
        step=1,
        key=key,
    )


def main() -> None:
    """Render one form per query type."""

    st.set_page_config(page_title="CiSaMe Query Forge", layout="wide")
    service = _load_app().query_service

    st.markdown("## CiSaMe Query Forge")
    st.caption("Build CQL queries for NoSketch Engine that tolerate medieval spellings.")

    proximity_tab, variation_tab, semantic_tab, bundle_tab = st.tabs(
        ["Proximity", "Proximity with variations", "Semantic context", "Variations"]
    )

    with proximity_tab, st.form("proximity"):
        term1 = st.text_input("First lemma", value="intentio", key="proximity_term1")
        term2 = st.text_input("Second lemma", value="Augustinus", key="proximity_term2")
        distance = _distance("proximity_distance", DEFAULT_LIMITS.default_proximity)
        attribute = st.radio("Search attribute", _ATTRIBUTES, horizontal=True, key="proximity_attribute")
        bidirectional = st.checkbox("Both orders", value=True, key="proximity_both")
        exclude_repeats = st.checkbox("Exclude repeated lemmas between the two", value=True)
        if st.form_submit_button("Generate query"):
            result = service.proximity(
                term1, term2, distance, attribute, bidirectional, exclude_repeats=exclude_repeats
            )
            st.markdown(service.format_result(result))

    with variation_tab, st.form("proximity_variations"):
        term1 = st.text_input("First lemma", value="intentio", key="variation_term1")
        term2 = st.text_input("Second lemma", value="ratio", key="variation_term2")
        distance = _distance("variation_distance", DEFAULT_LIMITS.default_proximity)
        strategy = st.selectbox("Variation type", _STRATEGIES)
        attribute = st.radio(
            "Search attribute", _ATTRIBUTES, index=1, horizontal=True, key="variation_attribute"
        )
        bidirectional = st.checkbox("Both orders", value=True, key="variation_both")
        if st.form_submit_button("Generate query"):
            result = service.proximity_with_variations(
                term1, term2, distance, strategy, attribute, bidirectional
            )
            st.markdown(service.format_result(result))

    with semantic_tab, st.form("semantic"):
        central = st.text_input("Central lemma", value="intentio")
        contexts = st.text_area(
            "Context lemmas",
            value="voluntas, ratio, intellectus",
            help="Separate lemmas with commas.",
        )
        distance = _distance("semantic_distance", DEFAULT_LIMITS.default_semantic)
        mode_label = st.radio("Context mode", list(_CONTEXT_MODES))
        if st.form_submit_button("Generate query"):
            result = service.semantic(central, contexts, distance, _CONTEXT_MODES[mode_label])
            st.markdown(service.format_result(result))

    with bundle_tab, st.form("variations"):
        word = st.text_input("Word", value="intentio")
        with_suffix = st.checkbox("Match inflected endings", value=True)
        attribute = st.radio(
            "Search attribute", _ATTRIBUTES, index=1, horizontal=True, key="bundle_attribute"
        )
        if st.form_submit_button("Generate queries"):
            st.markdown(service.format_result(service.variations(word, with_suffix, attribute)))


if __name__ == "__main__":
    main()
