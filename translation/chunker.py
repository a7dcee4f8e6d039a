"""
Translation Chunker Module

Splits oversized input into paragraph-bounded chunks so each translation
call stays inside the model's context window.
"""

# Standard library
import logging
import math
import re
from typing import List

# Configure logging
logger = logging.getLogger(__name__)

# Rough heuristic, not a tokenizer: ~3 characters per token
CHARS_PER_TOKEN_ESTIMATE = 3
TOKEN_THRESHOLD = 3000
MAX_CHUNK_CHARS = 2500
PARAGRAPH_SEPARATOR = "\n\n"

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def estimate_tokens(text: str) -> int:
    """
    Estimates the number of tokens in text.

    Args:
        text: The text to estimate tokens for.

    Returns:
        ceil(len(text) / CHARS_PER_TOKEN_ESTIMATE).
    """
    return math.ceil(len(text) / CHARS_PER_TOKEN_ESTIMATE)


def exceeds_token_limit(text: str, threshold: int = TOKEN_THRESHOLD) -> bool:
    """Whether the text must go through chunked translation."""
    return estimate_tokens(text) > threshold


def split_paragraphs(text: str) -> List[str]:
    """
    Splits text on blank-line boundaries.

    A boundary is any whitespace run containing at least one blank line.
    Blank pieces (e.g. from leading or trailing breaks) are dropped.

    Args:
        text: Source text.

    Returns:
        Paragraphs in original order.
    """
    return [part for part in _PARAGRAPH_BREAK.split(text) if part.strip()]


def pack_chunks(paragraphs: List[str], max_chars: int = MAX_CHUNK_CHARS) -> List[str]:
    """
    Greedily packs paragraphs into chunks of at most ``max_chars``.

    Paragraphs inside a chunk are joined with a blank line. A paragraph that
    alone exceeds ``max_chars`` becomes its own chunk and is not split.

    Args:
        paragraphs: Paragraphs in original order.
        max_chars: Soft size bound per chunk.

    Returns:
        Chunks in original order.
    """
    chunks: List[str] = []
    current = ""

    for paragraph in paragraphs:
        candidate = f"{current}{PARAGRAPH_SEPARATOR}{paragraph}" if current else paragraph
        if current and len(candidate) > max_chars:
            chunks.append(current)
            current = paragraph
        else:
            current = candidate

    if current:
        chunks.append(current)

    logger.debug(f"Packed {len(paragraphs)} paragraphs into {len(chunks)} chunks")
    return chunks


def chunk_text(text: str, max_chars: int = MAX_CHUNK_CHARS) -> List[str]:
    """Splits text into paragraphs and packs them into chunks."""
    return pack_chunks(split_paragraphs(text), max_chars=max_chars)
