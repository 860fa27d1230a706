"""User interface assembly for the Gradio front-end."""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import gradio as gr

from cisame_query.core import DEFAULT_LIMITS, QueryMode, SearchAttribute, VariationStrategy

from ..services.query_service import QueryGeneratorService, ServiceResult

_ATTRIBUTE_CHOICES: List[Tuple[str, str]] = [
    ("Lemma (normalized form)", SearchAttribute.LEMMA.value),
    ("Word (surface form)", SearchAttribute.WORD.value),
]

_STRATEGY_CHOICES: List[Tuple[str, str]] = [
    ("Simple: one letter → [A-z]?", VariationStrategy.SIMPLE.value),
    ("Medium: one letter → [A-z]*", VariationStrategy.MEDIUM.value),
    ("Complex: two letters → [A-z]*", VariationStrategy.COMPLEX.value),
    ("Medieval spellings", VariationStrategy.HISTORICAL.value),
    ("All of the above", VariationStrategy.ALL.value),
]

_CONTEXT_MODE_CHOICES: List[Tuple[str, str]] = [
    ("At least one context lemma", "any"),
    ("One pairing per context lemma", "phrase"),
    ("Every pair of context lemmas", "all"),
]

_CONTEXT_MODES: Dict[str, QueryMode] = {
    "any": QueryMode.SEMANTIC_ANY,
    "phrase": QueryMode.SEMANTIC_PHRASE,
    "all": QueryMode.SEMANTIC_ALL,
}

_INTERFACE_CSS = """
.cq-container {max-width: 1100px; margin: 0 auto; gap: 20px;}
.cq-hero {text-align: center; padding-bottom: 12px;}
.cq-panel {border: 1px solid rgba(15, 23, 42, 0.08); border-radius: 14px; background: #ffffff; padding: 20px;}
.cq-tip {color: #4b5563; font-size: 0.92rem;}
.cq-result {background: #f8fafc; border-radius: 12px; padding: 16px 18px; min-height: 160px;}
"""


def _distance_slider(value: int) -> Any:
    return gr.Slider(
        minimum=DEFAULT_LIMITS.minimum,
        maximum=DEFAULT_LIMITS.maximum,
        value=value,
        step=1,
        label="Maximum distance (tokens)",
    )


def _attribute_radio(value: str) -> Any:
    return gr.Radio(choices=_ATTRIBUTE_CHOICES, value=value, label="Search attribute")


def create_interface(service: QueryGeneratorService) -> gr.Blocks:
    """Construct the Blocks UI with one tab per query form."""

    def _render(result: ServiceResult) -> str:
        return service.format_result(result)

    def proximity_form(term1, term2, distance, attribute, bidirectional, exclude_repeats):
        return _render(
            service.proximity(
                term1,
                term2,
                distance,
                attribute,
                bidirectional,
                exclude_repeats=exclude_repeats,
            )
        )

    def variation_proximity_form(term1, term2, distance, strategy, attribute, bidirectional):
        return _render(
            service.proximity_with_variations(
                term1, term2, distance, strategy, attribute, bidirectional
            )
        )

    def semantic_form(central, contexts, distance, mode):
        return _render(service.semantic(central, contexts, distance, _CONTEXT_MODES.get(mode, mode)))

    def variations_form(word, with_suffix, attribute):
        return _render(service.variations(word, with_suffix, attribute))

    with gr.Blocks(title="CiSaMe Query Forge", css=_INTERFACE_CSS) as interface:
        with gr.Column(elem_classes=["cq-container"]):
            gr.Markdown(
                "<h2>CiSaMe Query Forge</h2>\n"
                "<p>Build CQL queries for NoSketch Engine that tolerate medieval spellings.</p>",
                elem_classes=["cq-hero"],
            )

            with gr.Tabs():
                with gr.Tab("Proximity"):
                    with gr.Group(elem_classes=["cq-panel"]):
                        prox_term1 = gr.Textbox(label="First lemma", value="intentio")
                        prox_term2 = gr.Textbox(label="Second lemma", value="Augustinus")
                        prox_distance = _distance_slider(DEFAULT_LIMITS.default_proximity)
                        prox_attribute = _attribute_radio(SearchAttribute.LEMMA.value)
                        with gr.Row():
                            prox_bidirectional = gr.Checkbox(value=True, label="Both orders")
                            prox_exclude = gr.Checkbox(
                                value=True,
                                label="Exclude repeated lemmas between the two",
                            )
                        prox_button = gr.Button("Generate query", variant="primary")
                    prox_output = gr.Markdown(elem_classes=["cq-result"])

                with gr.Tab("Proximity with variations"):
                    with gr.Group(elem_classes=["cq-panel"]):
                        var_term1 = gr.Textbox(label="First lemma", value="intentio")
                        var_term2 = gr.Textbox(label="Second lemma", value="ratio")
                        var_distance = _distance_slider(DEFAULT_LIMITS.default_proximity)
                        var_strategy = gr.Dropdown(
                            choices=_STRATEGY_CHOICES,
                            value=VariationStrategy.SIMPLE.value,
                            label="Variation type",
                        )
                        var_attribute = _attribute_radio(SearchAttribute.WORD.value)
                        var_bidirectional = gr.Checkbox(value=True, label="Both orders")
                        var_button = gr.Button("Generate query", variant="primary")
                        gr.Markdown(
                            "Complex and combined variations grow quadratically with word length.",
                            elem_classes=["cq-tip"],
                        )
                    var_output = gr.Markdown(elem_classes=["cq-result"])

                with gr.Tab("Semantic context"):
                    with gr.Group(elem_classes=["cq-panel"]):
                        sem_central = gr.Textbox(label="Central lemma", value="intentio")
                        sem_contexts = gr.Textbox(
                            label="Context lemmas",
                            value="voluntas, ratio, intellectus",
                            info="Separate lemmas with commas.",
                            lines=2,
                        )
                        sem_distance = _distance_slider(DEFAULT_LIMITS.default_semantic)
                        sem_mode = gr.Radio(
                            choices=_CONTEXT_MODE_CHOICES,
                            value="any",
                            label="Context mode",
                        )
                        sem_button = gr.Button("Generate query", variant="primary")
                    sem_output = gr.Markdown(elem_classes=["cq-result"])

                with gr.Tab("Variations"):
                    with gr.Group(elem_classes=["cq-panel"]):
                        bundle_word = gr.Textbox(label="Word", value="intentio")
                        bundle_suffix = gr.Checkbox(value=True, label="Match inflected endings")
                        bundle_attribute = _attribute_radio(SearchAttribute.WORD.value)
                        bundle_button = gr.Button("Generate queries", variant="primary")
                    bundle_output = gr.Markdown(elem_classes=["cq-result"])

        prox_button.click(
            proximity_form,
            [prox_term1, prox_term2, prox_distance, prox_attribute, prox_bidirectional, prox_exclude],
            prox_output,
        )
        var_button.click(
            variation_proximity_form,
            [var_term1, var_term2, var_distance, var_strategy, var_attribute, var_bidirectional],
            var_output,
        )
        sem_button.click(
            semantic_form,
            [sem_central, sem_contexts, sem_distance, sem_mode],
            sem_output,
        )
        bundle_button.click(
            variations_form,
            [bundle_word, bundle_suffix, bundle_attribute],
            bundle_output,
        )

    return interface


__all__ = ["create_interface"]
