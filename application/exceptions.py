"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.
"""

from typing import Optional


class ProgramImportError(Exception):
    """Error while persisting an imported program.

    Raised when resolving exercises or writing the program graph fails.
    This could be due to database errors, constraint violations, or RPC
    failures. The whole import is abandoned; no partial program graph is
    committed.

    Attributes:
        message: Human-readable summary
        details: String form of the underlying cause, if any
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    @property
    def details(self) -> str:
        if self.cause is not None:
            return str(self.cause)
        return self.message
