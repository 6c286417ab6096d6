from __future__ import annotations

import re

from chatbot_index.text import normalize_text

PARAGRAPH_SEPARATOR = "\n\n"

_BLANK_LINES = re.compile(r"\n{2,}")


def split_paragraphs(text: str) -> list[str]:
    blocks = (block.strip() for block in _BLANK_LINES.split(text))
    return [block for block in blocks if block]


def hard_split(block: str, max_len: int, overlap: int) -> list[str]:
    """Slide a max_len window over block, stepping by max_len - overlap."""
    step = max_len - overlap
    windows: list[str] = []
    for start in range(0, len(block), step):
        window = block[start : start + max_len].strip()
        if window:
            windows.append(window)
        if start + max_len >= len(block):
            break
    return windows


def chunk_text(text: str | None, max_len: int = 1200, overlap: int = 120) -> list[str]:
    if max_len <= 0:
        raise ValueError("max_len must be > 0")
    if overlap < 0 or overlap >= max_len:
        raise ValueError("overlap must be >= 0 and smaller than max_len")

    clean = normalize_text(text)
    if not clean:
        return []

    chunks: list[str] = []
    current = ""
    for block in split_paragraphs(clean):
        candidate = f"{current}{PARAGRAPH_SEPARATOR}{block}" if current else block
        if len(candidate) <= max_len:
            current = candidate
            continue

        if current:
            chunks.append(current)
            current = ""

        if len(block) <= max_len:
            current = block
        else:
            chunks.extend(hard_split(block, max_len, overlap))

    if current:
        chunks.append(current)
    return chunks
