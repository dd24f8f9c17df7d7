"""Exceptions raised by window placement."""


class PlacementError(Exception):
    """Window placement failed."""


class MissingAttachRectError(PlacementError, ValueError):
    """Placement was requested before an attachment rectangle was set."""

    def __init__(self, message: str = "Attachment rectangle is not set") -> None:
        super().__init__(message)


class WindowNotFoundError(PlacementError, LookupError):
    """The window to place does not exist in the compositor tree."""

    def __init__(self, window_id: int) -> None:
        self.window_id = window_id
        super().__init__(f"Window not found: {window_id}")
