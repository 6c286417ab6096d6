from __future__ import annotations

from collections.abc import Iterable, Sequence


def compute_tf(tokens: Iterable[str]) -> dict[str, int]:
    tf: dict[str, int] = {}
    for token in tokens:
        tf[token] = tf.get(token, 0) + 1
    return tf


def compute_df(token_lists: Iterable[Sequence[str]]) -> dict[str, int]:
    """Count, per token, the chunks containing it at least once."""
    df: dict[str, int] = {}
    for tokens in token_lists:
        for token in dict.fromkeys(tokens):
            df[token] = df.get(token, 0) + 1
    return df
