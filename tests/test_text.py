from __future__ import annotations

import pytest

from chatbot_index.text import ACCENTED_LETTERS, STOP_WORDS, normalize_text, tokenize


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "plain",
        "  leading and trailing  ",
        "a\tb\t\tc",
        "line one\r\nline two\r\n\r\nparagraph",
        "stray \r\r\n carriage",
        "spaces    \t   and tabs\n\n\n\nkept",
        " non breaking ",
    ],
)
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize_text(raw)
    assert normalize_text(once) == once


def test_normalize_rules() -> None:
    assert normalize_text(None) == ""
    assert normalize_text("a\r\nb") == "a\nb"
    assert normalize_text("a\t\tb") == "a b"
    assert normalize_text("  a   b  ") == "a b"
    assert normalize_text("a\n\n\nb") == "a\n\n\nb"


def test_tokenize_drops_french_stop_words() -> None:
    assert tokenize("Le chat mange la souris") == ["chat", "mange", "souris"]


def test_tokenize_keeps_accents_and_splits_hyphens() -> None:
    tokens = tokenize("Gestion des baux : État-des-lieux, 2024 !")
    assert tokens == ["gestion", "baux", "état", "lieux", "2024"]


def test_tokenize_keeps_duplicates_in_order() -> None:
    assert tokenize("Loyer, loyer; LOYER? charges") == ["loyer", "loyer", "loyer", "charges"]


def test_tokenize_only_noise_is_empty() -> None:
    assert tokenize("the a of le la x y z 1 - !") == []
    assert tokenize("") == []


def test_constants_are_lowercase_data() -> None:
    assert all(word == word.lower() for word in STOP_WORDS)
    assert all(len(letter) == 1 for letter in ACCENTED_LETTERS)
    assert tokenize(" ".join(ACCENTED_LETTERS * 2)) == []
    assert tokenize("".join(ACCENTED_LETTERS)) == ["".join(ACCENTED_LETTERS)]


def test_normalize_drops_byte_order_mark() -> None:
    assert normalize_text("\ufeffBonjour loyer\n") == "Bonjour loyer"
    assert normalize_text("\ufeff \ufeff x") == "x"
