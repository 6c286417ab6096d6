from __future__ import annotations

import re

MIN_TOKEN_LENGTH = 2

ACCENTED_LETTERS = ("à", "â", "ä", "ç", "é", "è", "ê", "ë", "î", "ï", "ô", "ö", "ù", "û", "ü", "ÿ", "œ", "æ")

# French first, then English. Some entries are shorter than MIN_TOKEN_LENGTH
# and are kept so the list can be reused with a lower threshold.
STOP_WORDS = frozenset(
    {
        "le", "la", "les", "un", "une", "des", "de", "du", "d", "et", "ou", "a", "à", "au", "aux",
        "en", "dans", "sur", "pour", "par", "avec", "sans",
        "ce", "cet", "cette", "ces", "mon", "ma", "mes", "ton", "ta", "tes", "son", "sa", "ses",
        "notre", "nos", "votre", "vos", "leur", "leurs",
        "je", "tu", "il", "elle", "on", "nous", "vous", "ils", "elles", "se", "s", "ne", "pas",
        "plus", "moins", "très", "tres",
        "the", "an", "and", "or", "to", "of", "in", "for", "with", "without",
        "this", "that", "these", "those", "is", "are", "was", "were", "be",
    }
)

_CRLF = re.compile(r"\r+\n")
_SPACE_RUN = re.compile(r" {2,}")
# str.strip() keeps a leading byte order mark.
_EDGES = re.compile(r"\A[\s\ufeff]+|[\s\ufeff]+\Z")
_NOISE = re.compile("[^a-z0-9" + "".join(re.escape(ch) for ch in ACCENTED_LETTERS) + r"\s-]")


def normalize_text(text: str | None) -> str:
    """Canonicalize line endings and horizontal whitespace.

    Newlines are left as they are so paragraph breaks survive for chunking.
    """
    if not text:
        return ""
    clean = _CRLF.sub("\n", text).replace("\t", " ")
    return _EDGES.sub("", _SPACE_RUN.sub(" ", clean))


def tokenize(text: str | None) -> list[str]:
    lowered = normalize_text(text).lower()
    stripped = _NOISE.sub(" ", lowered).replace("-", " ")
    return [
        token
        for token in stripped.split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]
