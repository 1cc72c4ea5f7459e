"""Pytest configuration and shared fixtures for the Lexsim test suite."""

import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so tests can import lexsim and simcore.*
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from loguru import logger as _loguru_logger  # noqa: E402

from simcore.profiler import Document  # noqa: E402


def _reset_loguru() -> None:
    _loguru_logger.remove()
    _loguru_logger.add(
        sys.stderr,
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
        colorize=False,
        enqueue=False,
    )


_reset_loguru()


@pytest.fixture(autouse=True)
def _restore_logging():
    """CLI commands rebind the loguru sink; put the test sink back afterwards."""
    yield
    _reset_loguru()


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = _loguru_logger.add(
        lambda msg: messages.append(msg.record["message"]), level="DEBUG"
    )
    yield messages
    _loguru_logger.remove(handler_id)


@pytest.fixture
def cat_documents() -> list[Document]:
    return [
        Document("doc1.txt", "THE CAT SAT ON THE MAT"),
        Document("doc2.txt", "THE CAT RAN ON THE ROAD"),
    ]


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    """A small folder of documents with one clear best pair."""
    folder = tmp_path / "books"
    folder.mkdir()
    (folder / "alpha.txt").write_text("the cat sat on the mat. The cat is fat!")
    (folder / "beta.txt").write_text("A cat sat on a mat; the mat was flat.")
    (folder / "gamma.txt").write_text("Rockets launch into orbit around planets.")
    (folder / "delta.txt").write_text("The and of in a an")
    return folder
