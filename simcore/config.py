"""Comparison options: defaults, JSON config files, and validation.

Validation follows the same two levels everywhere:

Syntactic = keys and types in a config file.
Semantic  = values that are well-typed but cannot drive a comparison
            (non-positive sizes, too few documents).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path

from simcore.errors import ConfigurationError
from simcore.text import DEFAULT_STOP_WORDS

DEFAULT_TOP_K = 100
DEFAULT_TOP_M = 10
MIN_DOCUMENTS = 2

KNOWN_KEYS = {"top_k", "top_m", "stop_words", "expected_count", "workers"}


@dataclass(frozen=True)
class ComparisonConfig:
    top_k: int = DEFAULT_TOP_K
    top_m: int = DEFAULT_TOP_M
    stop_words: frozenset[str] = field(default=DEFAULT_STOP_WORDS)
    expected_count: int | None = None
    workers: int = 1

    def __post_init__(self):
        object.__setattr__(self, "stop_words", frozenset(w.upper() for w in self.stop_words))

    def override(self, **values) -> "ComparisonConfig":
        """Return a copy with every non-None keyword applied."""
        changes = {k: v for k, v in values.items() if v is not None}
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "top_k": self.top_k,
            "top_m": self.top_m,
            "stop_words": sorted(self.stop_words),
            "expected_count": self.expected_count,
            "workers": self.workers,
        }


# ── Syntactic Validation ────────────────────────────────────────────

def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config_dict(raw: dict) -> list[str]:
    """Check keys and types of a config object.  Returns list of error strings."""
    if not isinstance(raw, dict):
        return ["Config must be a JSON object."]

    errors: list[str] = []

    unknown = sorted(set(raw) - KNOWN_KEYS)
    if unknown:
        errors.append(f"Unknown config keys: {unknown}. Known keys: {sorted(KNOWN_KEYS)}.")

    for key in ("top_k", "top_m", "workers"):
        if key in raw and (not _is_int(raw[key]) or raw[key] < 1):
            errors.append(f"'{key}' must be a positive integer.")

    if "expected_count" in raw:
        ec = raw["expected_count"]
        if ec is not None and (not _is_int(ec) or ec < MIN_DOCUMENTS):
            errors.append(
                f"'expected_count' must be null or an integer >= {MIN_DOCUMENTS}."
            )

    if "stop_words" in raw:
        sw = raw["stop_words"]
        if not isinstance(sw, list) or not all(isinstance(w, str) and w for w in sw):
            errors.append("'stop_words' must be a list of non-empty strings.")

    return errors


# ── Semantic Validation ─────────────────────────────────────────────

def check_config(config: ComparisonConfig) -> None:
    """Raise ConfigurationError if the options cannot drive a comparison."""
    errors: list[str] = []
    if config.top_k <= 0:
        errors.append(f"top_k must be positive, got {config.top_k}.")
    if config.top_m <= 0:
        errors.append(f"top_m must be positive, got {config.top_m}.")
    if config.workers <= 0:
        errors.append(f"workers must be positive, got {config.workers}.")
    if config.expected_count is not None and config.expected_count < MIN_DOCUMENTS:
        errors.append(
            f"expected_count must be at least {MIN_DOCUMENTS}, got {config.expected_count}."
        )
    if errors:
        raise ConfigurationError(errors)


def check_corpus_size(count: int) -> None:
    if count < MIN_DOCUMENTS:
        raise ConfigurationError(
            f"At least {MIN_DOCUMENTS} documents are needed for a pairwise comparison, got {count}."
        )


# ── Loading ─────────────────────────────────────────────────────────

def config_from_dict(raw: dict) -> ComparisonConfig:
    errors = validate_config_dict(raw)
    if errors:
        raise ConfigurationError(errors)
    return ComparisonConfig().override(**raw)


def read_config_json(config_path: str | Path):
    """Parse a config file without validating it."""
    path = Path(config_path)
    try:
        return json.loads(path.read_text())
    except FileNotFoundError:
        raise ConfigurationError(f"Config file not found: {config_path}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON: {e}")


def load_config(config_path: str | Path) -> ComparisonConfig:
    """Read a JSON config file into a ComparisonConfig."""
    return config_from_dict(read_config_json(config_path))
