from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class DocumentEntry:
    name: str
    source_path: str
    chunk_count: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "sourcePath": self.source_path, "chunkCount": self.chunk_count}


@dataclass(frozen=True)
class ChunkRecord:
    doc_name: str
    chunk_index: int
    text: str
    tokens: tuple[str, ...]
    tf: dict[str, int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "docName": self.doc_name,
            "chunkIndex": self.chunk_index,
            "text": self.text,
            "tokens": list(self.tokens),
            "tf": dict(self.tf),
        }


@dataclass(frozen=True)
class ChunkingOptions:
    max_len: int = 1200
    overlap: int = 120

    def to_dict(self) -> dict[str, int]:
        return {"maxLen": self.max_len, "overlap": self.overlap}


@dataclass(frozen=True)
class IndexStats:
    total_docs: int
    total_chunks: int

    def to_dict(self) -> dict[str, int]:
        return {"totalDocs": self.total_docs, "totalChunks": self.total_chunks}


@dataclass(frozen=True)
class IndexPayload:
    """Root artifact of a build, serialized as the chatbot index JSON."""

    version: int
    generated_at: str
    chunking: ChunkingOptions
    docs: tuple[DocumentEntry, ...]
    stats: IndexStats
    df: dict[str, int]
    chunks: tuple[ChunkRecord, ...]

    def to_dict(self) -> dict[str, Any]:
        # Key order is part of the output format.
        return {
            "version": self.version,
            "generatedAt": self.generated_at,
            "chunking": self.chunking.to_dict(),
            "docs": [doc.to_dict() for doc in self.docs],
            "stats": self.stats.to_dict(),
            "df": dict(self.df),
            "chunks": [chunk.to_dict() for chunk in self.chunks],
        }


@dataclass
class BuildSummary:
    files_indexed: int = 0
    chunks_written: int = 0
    unique_terms: int = 0
    out_path: Path | None = None
    duration_s: float = 0.0
    sources: list[str] = field(default_factory=list)
