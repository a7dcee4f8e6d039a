"""Tests for translation system instructions and model parameters."""

from translation.prompts import (
    BASELINE_PARAMETERS,
    DEFAULT_STYLE_INSTRUCTION,
    DEFAULT_TONE_INSTRUCTION,
    FORMATTING_INSTRUCTION,
    LANGUAGE_HINTS,
    STYLE_INSTRUCTIONS,
    TONE_INSTRUCTIONS,
    build_system_instruction,
    language_name,
    select_model_parameters,
)
from translation.schemas import TranslationOptions


def test_language_name_falls_back_to_code() -> None:
    assert language_name("fr") == "French"
    assert language_name("EN") == "English"
    assert language_name("xx") == "xx"


def test_instruction_names_both_languages() -> None:
    instruction = build_system_instruction("en", "fr", TranslationOptions())

    assert instruction.startswith(
        "You are a professional translator with expertise in English and French."
    )
    assert "Translate the text from English to French" in instruction
    assert instruction.endswith("Return only the translated text.")


def test_instruction_includes_tone_and_style() -> None:
    options = TranslationOptions(tone="formal", style="simplified")

    instruction = build_system_instruction("en", "de", options)

    assert TONE_INSTRUCTIONS["formal"] in instruction
    assert STYLE_INSTRUCTIONS["simplified"] in instruction


def test_instruction_defaults_for_standard_options() -> None:
    instruction = build_system_instruction("en", "es", TranslationOptions())

    assert DEFAULT_TONE_INSTRUCTION in instruction
    assert DEFAULT_STYLE_INSTRUCTION in instruction
    assert FORMATTING_INSTRUCTION in instruction


def test_formatting_clause_is_optional() -> None:
    options = TranslationOptions(preserve_formatting=False)

    assert FORMATTING_INSTRUCTION not in build_system_instruction("en", "es", options)


def test_language_hint_only_for_known_targets() -> None:
    options = TranslationOptions()

    assert LANGUAGE_HINTS["ja"] in build_system_instruction("en", "ja", options)
    for hint in LANGUAGE_HINTS.values():
        assert hint not in build_system_instruction("fr", "en", options)


def test_instruction_is_deterministic() -> None:
    options = TranslationOptions(tone="casual", style="detailed")

    first = build_system_instruction("en", "it", options)
    second = build_system_instruction("en", "it", TranslationOptions(tone="casual", style="detailed"))

    assert first == second


def test_model_parameters_follow_style() -> None:
    detailed = select_model_parameters("detailed")
    simplified = select_model_parameters("simplified")

    assert (detailed.temperature, detailed.max_output_tokens) == (0.4, 3000)
    assert (simplified.temperature, simplified.max_output_tokens) == (0.2, 1500)
    assert select_model_parameters("standard") == BASELINE_PARAMETERS
    assert select_model_parameters(None) == BASELINE_PARAMETERS
    assert (BASELINE_PARAMETERS.temperature, BASELINE_PARAMETERS.max_output_tokens) == (0.3, 2000)
