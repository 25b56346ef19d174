"""Exceptions raised by the compiler."""


class HccError(Exception):
    """Base class of every error the compiler reports."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class CompileError(HccError):
    """Raised when a program cannot be compiled (unknown type, undefined variable, ...)."""


class BackendError(HccError):
    """Raised when a backend cannot be selected or used."""