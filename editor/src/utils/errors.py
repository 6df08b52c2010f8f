"""Editor error kinds.

Every failure a user can trigger is one of these. Models raise them;
the controller catches them at the command boundary and reports a
single-line message instead of letting them escape.
"""


class EditorError(Exception):
    """Base class for all editor failures"""


class ValidationError(EditorError, ValueError):
    """Bad numeric input (dimension, scale, ...). Raised before any mutation."""


class InvariantViolation(EditorError, RuntimeError):
    """Operation would break a structural invariant (e.g. deleting the last layer)."""


class DecodeFailure(EditorError, ValueError):
    """An encoded layer bitmap could not be turned back into pixels."""

    def __init__(self, message, layer_id=None, layer_name=None):
        super().__init__(message)
        self.layer_id = layer_id
        self.layer_name = layer_name


class ProjectFormatError(EditorError, ValueError):
    """A project file is not valid JSON or lacks required fields."""
