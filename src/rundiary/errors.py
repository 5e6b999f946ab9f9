"""Error types for the running diary.

Custom exceptions raised by the activity model, the save-file codec and the
editing workflow.
"""


class DiaryError(Exception):
    """Base exception for running diary errors."""

    pass


class FormatError(DiaryError):
    """Raised when a save file cannot be decoded."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        """Initialize format error.

        Args:
            message: Error message.
            line_number: 1-based line of the save file where decoding failed.
        """
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class IncompleteDataError(DiaryError):
    """Raised when a derived metric needs a segment duration that is unset."""

    def __init__(self, message: str, segment_index: int | None = None) -> None:
        super().__init__(message)
        self.segment_index = segment_index


class ValidationError(DiaryError):
    """Raised by the editing workflow for malformed user input."""

    pass


__all__ = [
    "DiaryError",
    "FormatError",
    "IncompleteDataError",
    "ValidationError",
]
