from __future__ import annotations

from typing import Any


class InvalidInput(ValueError):
    """Raised before any computation when a calculation request is malformed."""

    def __init__(self, issues: list[dict[str, Any]]):
        self.issues = issues
        summary = "; ".join(f"{issue['field']}: {issue['message']}" for issue in issues)
        super().__init__(summary or "invalid calculation input")


class InvalidBracketTable(ValueError):
    pass


class UnknownRegimeError(KeyError):
    pass
