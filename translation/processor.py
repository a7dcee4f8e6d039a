"""
Chunked Translation Processor

Translates text of unbounded length through the chat model. Short input is
sent in one call; long input is split into paragraph-bounded chunks that
are translated one at a time and rejoined in their original order.
"""

# Standard library
import logging
import re
from typing import List, Optional

# Third-party
from langchain_core.messages import HumanMessage, SystemMessage

# Local application
from core.providers import get_llm
from translation.chunker import (
    MAX_CHUNK_CHARS,
    PARAGRAPH_SEPARATOR,
    TOKEN_THRESHOLD,
    chunk_text,
    estimate_tokens,
)
from translation.errors import (
    LanguageDetectionError,
    TranslationValidationError,
    classify_llm_error,
)
from translation.prompts import (
    LANGUAGE_DETECTION_INSTRUCTION,
    build_system_instruction,
    select_model_parameters,
)
from translation.schemas import TranslationOptions

# Configure logging
logger = logging.getLogger(__name__)

CHUNK_ERROR_TEMPLATE = "[TRANSLATION ERROR: {reason}]"

_LANGUAGE_CODE = re.compile(r"[a-z]{2}")


def _response_text(response) -> str:
    content = getattr(response, "content", response)
    if isinstance(content, list):
        # Multi-part content blocks
        content = "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        )
    return str(content).strip()


class TranslationProcessor:
    """
    Translates text through the chat model, chunking when it is too long.

    Attributes:
        token_threshold: Largest token estimate translated in one call.
        max_chunk_chars: Soft size bound for each chunk.
    """

    def __init__(
        self,
        token_threshold: int = TOKEN_THRESHOLD,
        max_chunk_chars: int = MAX_CHUNK_CHARS,
    ) -> None:
        self.token_threshold = token_threshold
        self.max_chunk_chars = max_chunk_chars

    async def translate(
        self,
        text: str,
        source_lang: Optional[str],
        target_lang: Optional[str],
        options: Optional[TranslationOptions] = None,
    ) -> str:
        """
        Translates text from source_lang to target_lang.

        Args:
            text: Text to translate.
            source_lang: ISO 639-1 code, detected when empty.
            target_lang: ISO 639-1 code.
            options: Tone/style/formatting options.

        Returns:
            Translated text.

        Raises:
            TranslationValidationError: Empty text or missing target language.
            LanguageDetectionError: Source language could not be detected.
            TranslationError: Classified failure of the single-call path.
        """
        self.validate(text, target_lang)
        target_lang = target_lang.strip()
        options = options or TranslationOptions()
        source_lang = await self.resolve_source_language(text, source_lang)

        if estimate_tokens(text) <= self.token_threshold:
            return await self._translate_direct(text, source_lang, target_lang, options)

        return await self.translate_chunked(text, source_lang, target_lang, options)

    @staticmethod
    def validate(text: str, target_lang: Optional[str]) -> None:
        """Rejects requests that cannot be translated."""
        if not isinstance(text, str) or not text.strip():
            raise TranslationValidationError("Source text is required")
        if not target_lang or not target_lang.strip():
            raise TranslationValidationError("Target language is required")

    async def resolve_source_language(self, text: str, source_lang: Optional[str]) -> str:
        """Returns source_lang, or the detected language when it is empty."""
        if source_lang and source_lang.strip():
            return source_lang.strip()
        return await self.detect_language(text)

    async def detect_language(self, text: str) -> str:
        """
        Detects the ISO 639-1 code of the text.

        Raises:
            LanguageDetectionError: On any provider failure or an answer that is not a two-letter code.
        """
        llm = get_llm("language_detection", temperature=0.1, max_output_tokens=10)
        messages = [
            SystemMessage(content=LANGUAGE_DETECTION_INSTRUCTION),
            HumanMessage(content=text),
        ]
        try:
            response = await llm.ainvoke(messages)
        except Exception as e:  # noqa: BLE001
            logger.error(f"Language detection error: {e}")
            raise LanguageDetectionError() from e

        code = _response_text(response).strip("\"'` .").lower()
        if not _LANGUAGE_CODE.fullmatch(code):
            logger.error(f"Language detection returned an invalid code: {code!r}")
            raise LanguageDetectionError()

        logger.info(f"Detected language: {code}")
        return code

    async def translate_chunked(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        options: TranslationOptions,
    ) -> str:
        """
        Translates text chunk by chunk and joins the results in order.

        A chunk whose call fails is replaced by an inline error marker; the
        remaining chunks are still translated.
        """
        chunks = chunk_text(text, max_chars=self.max_chunk_chars)
        logger.info(
            f"Chunked translation: {len(text)} chars in {len(chunks)} chunks "
            f"({source_lang} -> {target_lang})"
        )

        translated_chunks: List[str] = []
        for index, chunk in enumerate(chunks, start=1):
            translated_chunks.append(
                await self._translate_chunk(chunk, source_lang, target_lang, options, index)
            )

        return PARAGRAPH_SEPARATOR.join(translated_chunks)

    async def _translate_direct(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        options: TranslationOptions,
    ) -> str:
        try:
            return await self._complete(text, source_lang, target_lang, options)
        except Exception as e:  # noqa: BLE001
            logger.error(f"Translation error: {e}")
            raise classify_llm_error(e) from e

    async def _translate_chunk(
        self,
        chunk: str,
        source_lang: str,
        target_lang: str,
        options: TranslationOptions,
        index: int,
    ) -> str:
        try:
            return await self._complete(chunk, source_lang, target_lang, options)
        except Exception as e:  # noqa: BLE001
            logger.error(f"Chunk {index} translation error: {e}")
            return CHUNK_ERROR_TEMPLATE.format(reason=e)

    async def _complete(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        options: TranslationOptions,
    ) -> str:
        params = select_model_parameters(options.style)
        llm = get_llm(
            "translation",
            temperature=params.temperature,
            max_output_tokens=params.max_output_tokens,
        )
        messages = [
            SystemMessage(content=build_system_instruction(source_lang, target_lang, options)),
            HumanMessage(content=text),
        ]
        response = await llm.ainvoke(messages)
        return _response_text(response)


_translation_processor: Optional[TranslationProcessor] = None


def get_translation_processor() -> TranslationProcessor:
    """
    Gets or creates the translation processor singleton.

    Returns:
        TranslationProcessor instance.
    """
    global _translation_processor
    if _translation_processor is None:
        _translation_processor = TranslationProcessor()
    return _translation_processor
