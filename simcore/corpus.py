"""Corpus loader: reads every regular file of a folder as one document."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from simcore.errors import CorpusError
from simcore.profiler import Document


def load_document(path: str | Path) -> Document:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise CorpusError(f"Unable to open file: {path} ({e.strerror or e})") from e
    return Document(name=path.name, text=text)


def load_corpus(
    folder: str | Path,
    expected_count: int | None = None,
    pattern: str = "*",
) -> list[Document]:
    """Load the files directly inside `folder`, sorted by file name.

    Raises CorpusError if the folder is missing, a file cannot be read, or
    `expected_count` is set and does not match the number of files.
    """
    root = Path(folder)
    if not root.is_dir():
        raise CorpusError(f"The path does not exist or is not a directory: {folder}")

    files = sorted((p for p in root.glob(pattern) if p.is_file()), key=lambda p: p.name)
    if expected_count is not None and len(files) != expected_count:
        raise CorpusError(
            f"Error parsing documents. The number of documents found is not "
            f"{expected_count}, but {len(files)}"
        )

    documents = [load_document(p) for p in files]
    logger.info("Loaded {} documents from {}", len(documents), root)
    return documents
