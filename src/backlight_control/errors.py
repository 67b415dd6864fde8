from __future__ import annotations


class BacklightError(RuntimeError):
    """Base class for failures that end a run with a non-zero exit code."""
