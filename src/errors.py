# src/errors.py

from typing import Optional

class AppError(Exception):
    """
    Base exception for colortail.
    All other exceptions should inherit from this.
    """
    def __init__(self, message: str, *, underlying: Optional[Exception] = None):
        super().__init__(message)
        self.underlying = underlying

    def __str__(self):
        if self.underlying:
            return f"{self.args[0]} (caused by {self.underlying})"
        return self.args[0]


class NotifierSetupError(AppError):
    """
    Raised when the watched file's directory cannot be watched or the
    initial file length cannot be read. Fatal for the tail session.
    """


class TailReadError(AppError):
    """
    Base for failures scoped to a single tick. The pipeline logs and skips these.
    """


class TransientReadError(TailReadError):
    """
    Raised when the file is temporarily locked, missing or unreadable.
    """


class DecodeError(TailReadError):
    """
    Raised when the appended bytes are not valid text in the configured encoding.
    """
