from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from chatbot_index.chunker import chunk_text
from chatbot_index.config import Settings
from chatbot_index.locator import resolve_inputs
from chatbot_index.models import (
    BuildSummary,
    ChunkingOptions,
    ChunkRecord,
    DocumentEntry,
    IndexPayload,
    IndexStats,
)
from chatbot_index.stats import compute_df, compute_tf
from chatbot_index.text import tokenize

logger = logging.getLogger(__name__)

INDEX_VERSION = 1


class IndexValidationError(ValueError):
    """Raised when a payload breaks the index invariants."""


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _now_iso() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class IndexBuilder:
    """Accumulates documents and chunks; every step returns a new builder."""

    options: ChunkingOptions
    docs: tuple[DocumentEntry, ...] = ()
    chunks: tuple[ChunkRecord, ...] = ()

    def with_document(self, name: str, source_path: str, parts: Sequence[str]) -> IndexBuilder:
        records: list[ChunkRecord] = []
        for chunk_index, text in enumerate(parts):
            tokens = tokenize(text)
            records.append(
                ChunkRecord(
                    doc_name=name,
                    chunk_index=chunk_index,
                    text=text,
                    tokens=tuple(tokens),
                    tf=compute_tf(tokens),
                )
            )
        entry = DocumentEntry(name=name, source_path=source_path, chunk_count=len(records))
        return replace(self, docs=self.docs + (entry,), chunks=self.chunks + tuple(records))

    def build(self, generated_at: str | None = None) -> IndexPayload:
        return IndexPayload(
            version=INDEX_VERSION,
            generated_at=generated_at or _now_iso(),
            chunking=self.options,
            docs=self.docs,
            stats=IndexStats(total_docs=len(self.docs), total_chunks=len(self.chunks)),
            df=compute_df(chunk.tokens for chunk in self.chunks),
            chunks=self.chunks,
        )


def build_index(sources: Sequence[str], options: ChunkingOptions, root: Path) -> IndexPayload:
    builder = IndexBuilder(options=options)
    for source in sources:
        path = Path(source)
        absolute = path if path.is_absolute() else root / path
        text = absolute.read_text(encoding="utf-8-sig")
        parts = chunk_text(text, max_len=options.max_len, overlap=options.overlap)
        logger.info("%s: %d chunk(s)", source, len(parts))
        builder = builder.with_document(name=path.name, source_path=source, parts=parts)
    return builder.build()


def validate_payload(payload: IndexPayload) -> None:
    if payload.version != INDEX_VERSION:
        raise IndexValidationError(f"unsupported index version: {payload.version}")
    if payload.stats.total_docs != len(payload.docs):
        raise IndexValidationError("stats.totalDocs does not match docs")
    if payload.stats.total_chunks != len(payload.chunks):
        raise IndexValidationError("stats.totalChunks does not match chunks")
    if any(doc.chunk_count < 0 for doc in payload.docs):
        raise IndexValidationError("docs chunkCount must be >= 0")
    if sum(doc.chunk_count for doc in payload.docs) != len(payload.chunks):
        raise IndexValidationError("sum of docs chunkCount does not match chunks")

    # Chunks are stored document by document, indexed from 0.
    position = 0
    for doc in payload.docs:
        for expected_index in range(doc.chunk_count):
            chunk = payload.chunks[position]
            if chunk.doc_name != doc.name or chunk.chunk_index != expected_index:
                raise IndexValidationError(
                    f"chunk {position} is ({chunk.doc_name}, {chunk.chunk_index}), "
                    f"expected ({doc.name}, {expected_index})"
                )
            if chunk.tf != compute_tf(chunk.tokens):
                raise IndexValidationError(f"tf of chunk ({doc.name}, {expected_index}) does not match its tokens")
            position += 1

    vocabulary = {token for chunk in payload.chunks for token in chunk.tokens}
    if set(payload.df) != vocabulary:
        raise IndexValidationError("df keys do not match the chunk tokens")
    for token, count in payload.df.items():
        if not 1 <= count <= payload.stats.total_chunks:
            raise IndexValidationError(f"df[{token!r}]={count} is out of range")


def serialize_payload(payload: IndexPayload) -> str:
    return json.dumps(payload.to_dict(), ensure_ascii=False, separators=(",", ":"))


def write_index(payload: IndexPayload, out_path: Path) -> None:
    """Write the payload next to out_path, then move it into place."""
    validate_payload(payload)
    data = serialize_payload(payload)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{out_path.name}.", suffix=".tmp", dir=out_path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, out_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _payload_from_dict(data: Any) -> IndexPayload:
    if not isinstance(data, dict):
        raise IndexValidationError("index root must be a JSON object")
    try:
        chunking = data["chunking"]
        stats = data["stats"]
        return IndexPayload(
            version=int(data["version"]),
            generated_at=str(data["generatedAt"]),
            chunking=ChunkingOptions(max_len=int(chunking["maxLen"]), overlap=int(chunking["overlap"])),
            docs=tuple(
                DocumentEntry(
                    name=str(doc["name"]),
                    source_path=str(doc["sourcePath"]),
                    chunk_count=int(doc["chunkCount"]),
                )
                for doc in data["docs"]
            ),
            stats=IndexStats(total_docs=int(stats["totalDocs"]), total_chunks=int(stats["totalChunks"])),
            df={str(token): int(count) for token, count in data["df"].items()},
            chunks=tuple(
                ChunkRecord(
                    doc_name=str(chunk["docName"]),
                    chunk_index=int(chunk["chunkIndex"]),
                    text=str(chunk["text"]),
                    tokens=tuple(str(token) for token in chunk["tokens"]),
                    tf={str(token): int(count) for token, count in chunk["tf"].items()},
                )
                for chunk in data["chunks"]
            ),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise IndexValidationError(f"malformed index: {exc}") from exc


def load_index(path: Path) -> IndexPayload:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise IndexValidationError(f"{path} is not valid JSON: {exc}") from exc
    payload = _payload_from_dict(data)
    validate_payload(payload)
    return payload


def run_build(settings: Settings, files: Sequence[str] = ()) -> BuildSummary:
    started = time.perf_counter()
    sources = resolve_inputs(files, root=settings.root, project=settings.project)
    options = ChunkingOptions(max_len=settings.max_len, overlap=settings.overlap)

    payload = build_index(sources, options=options, root=settings.root)
    write_index(payload, settings.out_path)
    logger.info("Wrote %s", settings.out_path)

    return BuildSummary(
        files_indexed=payload.stats.total_docs,
        chunks_written=payload.stats.total_chunks,
        unique_terms=len(payload.df),
        out_path=settings.out_path,
        duration_s=round(time.perf_counter() - started, 3),
        sources=list(sources),
    )
