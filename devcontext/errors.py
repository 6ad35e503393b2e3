"""Exception types for the context engine.

Analyzers degrade to empty/zero results when a signal is simply absent; these
exceptions are reserved for records that break the data model and for
failures of the content provider.
"""


class DevContextError(Exception):
    """Base class for all errors raised by devcontext."""


class InvalidInputError(DevContextError):
    """A record is missing a required field or carries the wrong type."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class DuplicateIdentityError(InvalidInputError):
    """Two comment records claim the same id under the strict policy."""

    def __init__(self, comment_id):
        super().__init__(f"Duplicate comment id: {comment_id!r}", field='id')
        self.comment_id = comment_id


class ProviderError(DevContextError):
    """The content provider could not deliver a record."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code
