"""Root exception for docugit-analyzer."""

from typing import Mapping, Optional


class DocugitAnalyzerError(Exception):
    """Root of every error the analyzer raises on purpose.

    ``details`` carries structured context (path, key, reason...) and is
    appended to the message when the error is printed, in insertion order.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details) if details else {}

    def _details_text(self) -> str:
        return ", ".join(f"{key}={value}" for key, value in self.details.items())

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} ({self._details_text()})"
