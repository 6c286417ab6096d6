from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from pathlib import Path

from chatbot_index.config import ConfigError

logger = logging.getLogger(__name__)

DOCS_SUBDIR = Path("Docs") / "product"


class NoInputFilesError(ConfigError):
    """Raised when no Markdown sources were given or discovered."""


def doc_pattern(project: str) -> re.Pattern[str]:
    return re.compile(rf"^PRODUCT_DOC_{re.escape(project)}-.*\.md$", re.IGNORECASE)


def _scan(directory: Path, pattern: re.Pattern[str], prefix: Path | None) -> list[str]:
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        logger.debug("Skipping %s: %s", directory, exc)
        return []
    found: list[str] = []
    for entry in entries:
        if not entry.is_file() or not pattern.match(entry.name):
            continue
        found.append((prefix / entry.name).as_posix() if prefix else entry.name)
    return found


def discover_docs(root: Path, project: str) -> list[str]:
    """Find product docs in root and root/Docs/product, relative to root."""
    pattern = doc_pattern(project)
    candidates = _scan(root, pattern, None) + _scan(root / DOCS_SUBDIR, pattern, DOCS_SUBDIR)
    return sorted(candidates)


def resolve_inputs(explicit: Sequence[str], root: Path, project: str) -> list[str]:
    if explicit:
        return list(explicit)

    discovered = discover_docs(root, project)
    if not discovered:
        raise NoInputFilesError(
            f"No .md files provided and none found matching PRODUCT_DOC_{project}-*.md "
            f"in {root} or {root / DOCS_SUBDIR}."
        )
    logger.info("Discovered %d document(s)", len(discovered))
    return discovered
