"""Exception hierarchy for Lexsim.

CorpusError and ConfigurationError abort a run.  EmptyProfileError is
raised while profiling a single document and is absorbed by the profiler,
which degrades the document to an empty profile.
"""

from __future__ import annotations


class LexsimError(Exception):
    """Base class for every error Lexsim raises on purpose."""


class CorpusError(LexsimError):
    """The documents could not be obtained (missing folder, unreadable file, wrong count)."""


class EmptyProfileError(LexsimError):
    """A document has no countable tokens once stop words are removed."""


class ConfigurationError(LexsimError):
    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))
