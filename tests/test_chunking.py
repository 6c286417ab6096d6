from __future__ import annotations

import pytest

from chatbot_index.chunker import chunk_text, hard_split, split_paragraphs
from chatbot_index.text import normalize_text


def test_hard_split_respects_chunk_size() -> None:
    text = "abcdefghijklmnopqrstuvwxyz"
    chunks = chunk_text(text=text, max_len=10, overlap=2)
    assert chunks
    assert all(len(c) <= 10 for c in chunks)
    assert chunks == ["abcdefghij", "ijklmnopqr", "qrstuvwxyz"]


def test_chunk_text_empty_input() -> None:
    assert chunk_text(text="   ", max_len=10, overlap=2) == []
    assert chunk_text(text=None) == []


def test_single_short_paragraph_is_one_chunk() -> None:
    paragraph = "Le locataire paie son loyer au debut du mois ici."
    assert chunk_text(f"\n\n  {paragraph}\n") == [paragraph]


def test_small_paragraphs_are_merged_with_blank_line() -> None:
    first = "Premier paragraphe sur les contrats de location."
    second = "Second paragraphe sur les depots de garantie."
    assert chunk_text(f"{first}\r\n\r\n\r\n{second}") == [f"{first}\n\n{second}"]


def test_long_paragraph_windows_overlap() -> None:
    block = "abcdefghij" * 300
    chunks = chunk_text(block, max_len=1200, overlap=120)

    assert len(chunks) >= 3
    assert all(len(c) <= 1200 for c in chunks)
    for previous, following in zip(chunks, chunks[1:]):
        assert previous[-120:] == following[:120]
    assert chunks[-1].endswith(block[-50:])


def test_block_of_exactly_max_len_is_not_split() -> None:
    block = "x" * 20
    assert chunk_text(f"{block}\n\n{block}", max_len=20, overlap=5) == [block, block]


def test_buffer_is_flushed_before_oversized_block() -> None:
    chunks = chunk_text("intro\n\n" + "y" * 25 + "\n\nfin", max_len=10, overlap=2)
    assert chunks[0] == "intro"
    assert chunks[-1] == "fin"
    assert all(len(c) <= 10 for c in chunks)


def test_chunks_cover_source_without_hard_splits() -> None:
    paragraphs = [(f"Paragraphe {i} " + "mot " * i).strip() for i in range(12)]
    source = "\n\n".join(paragraphs)
    chunks = chunk_text(source, max_len=120, overlap=10)

    assert all(len(c) <= 120 for c in chunks)
    assert "\n\n".join(chunks) == normalize_text(source)


def test_split_paragraphs_drops_blank_blocks() -> None:
    assert split_paragraphs("a\n\n \n\n\nb\nc") == ["a", "b\nc"]


def test_hard_split_stops_at_block_end() -> None:
    assert hard_split("abcdefghij", max_len=5, overlap=0) == ["abcde", "fghij"]


@pytest.mark.parametrize(("max_len", "overlap"), [(10, 10), (10, 12), (0, 0), (10, -1)])
def test_invalid_overlap_is_rejected(max_len: int, overlap: int) -> None:
    with pytest.raises(ValueError):
        chunk_text("some text", max_len=max_len, overlap=overlap)


def test_hard_split_windows_cover_whole_block() -> None:
    block = "".join(chr(ord("a") + i % 26) for i in range(1037))
    max_len, overlap = 100, 15
    chunks = chunk_text(f"intro\n\n{block}\n\nfin", max_len=max_len, overlap=overlap)

    windows = chunks[1:-1]
    rebuilt = windows[0] + "".join(w[overlap:] for w in windows[1:])
    assert chunks[0] == "intro"
    assert chunks[-1] == "fin"
    assert all(len(c) <= max_len for c in chunks)
    assert rebuilt == block
