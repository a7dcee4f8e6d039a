"""
Translation Prompt Construction

Builds the system instruction and model parameters from static lookup
tables keyed by the request's languages and options.
"""

from __future__ import annotations

from dataclasses import dataclass

from translation.schemas import TranslationOptions

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "ru": "Russian",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
    "ar": "Arabic",
    "hi": "Hindi",
    "tr": "Turkish",
}

TONE_INSTRUCTIONS: dict[str, str] = {
    "formal": "Use formal language, appropriate for professional or academic contexts.",
    "informal": "Use informal but respectful language.",
    "casual": "Use casual, conversational language.",
    "professional": "Use professional language appropriate for business contexts.",
}
DEFAULT_TONE_INSTRUCTION = "Use a neutral tone."

STYLE_INSTRUCTIONS: dict[str, str] = {
    "simplified": (
        "Simplify the translation while preserving core meaning. "
        "Use simpler vocabulary and shorter sentences."
    ),
    "detailed": (
        "Provide a detailed translation, preserving nuances and subtleties "
        "of the original text."
    ),
}
DEFAULT_STYLE_INSTRUCTION = "Translate with a balance of accuracy and readability."

FORMATTING_INSTRUCTION = (
    "Preserve the original formatting including paragraphs, bullet points, "
    "and text structure."
)

# Register hints keyed by target language code
LANGUAGE_HINTS: dict[str, str] = {
    "es": 'For Spanish, pay attention to formal vs. informal "you" (tú/usted) based on the tone.',
    "fr": 'For French, pay attention to formal vs. informal "you" (tu/vous) based on the tone.',
    "de": 'For German, pay attention to formal vs. informal "you" (du/Sie) based on the tone.',
    "it": 'For Italian, pay attention to formal vs. informal "you" (tu/Lei) based on the tone.',
    "pt": 'For Portuguese, pay attention to formal vs. informal "you" (tu/você/o senhor) based on the tone.',
    "ja": "For Japanese, use appropriate levels of politeness (keigo) based on the tone.",
    "ko": "For Korean, choose the speech level (honorific or plain) based on the tone.",
    "zh": "For Chinese, use simplified characters unless otherwise specified.",
}

LANGUAGE_DETECTION_INSTRUCTION = (
    "You are a language detection system. Analyze the provided text and respond "
    'with only the ISO 639-1 language code of the detected language (e.g., "en" '
    'for English, "fr" for French).'
)


@dataclass(frozen=True)
class ModelParameters:
    """Sampling parameters for a translation call."""

    temperature: float
    max_output_tokens: int


BASELINE_PARAMETERS = ModelParameters(temperature=0.3, max_output_tokens=2000)

STYLE_PARAMETERS: dict[str, ModelParameters] = {
    "detailed": ModelParameters(temperature=0.4, max_output_tokens=3000),
    "simplified": ModelParameters(temperature=0.2, max_output_tokens=1500),
}


def language_name(code: str) -> str:
    """Returns the English display name for an ISO 639-1 code, or the code."""
    return LANGUAGE_NAMES.get(code.lower(), code)


def build_system_instruction(
    source_lang: str, target_lang: str, options: TranslationOptions
) -> str:
    """
    Builds the translation system instruction.

    The result depends only on the arguments, so identical requests always
    produce byte-identical instructions.
    """
    source = language_name(source_lang)
    target = language_name(target_lang)

    clauses = [
        f"You are a professional translator with expertise in {source} and {target}.",
        f"Translate the text from {source} to {target}, preserving the original meaning and context.",
        TONE_INSTRUCTIONS.get(options.tone, DEFAULT_TONE_INSTRUCTION),
        STYLE_INSTRUCTIONS.get(options.style, DEFAULT_STYLE_INSTRUCTION),
    ]
    if options.preserve_formatting:
        clauses.append(FORMATTING_INSTRUCTION)
    hint = LANGUAGE_HINTS.get(target_lang.lower())
    if hint:
        clauses.append(hint)
    clauses.append("Return only the translated text.")

    return " ".join(clauses)


def select_model_parameters(style: str | None) -> ModelParameters:
    """Picks temperature and output budget from the requested style alone."""
    return STYLE_PARAMETERS.get(style or "", BASELINE_PARAMETERS)
