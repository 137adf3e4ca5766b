"""Exceptions raised by the simulated machine."""


class Panic(RuntimeError):
    """A simulated kernel panic: the machine reached an unrecoverable state."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"panic: {self.message}" if self.message else "panic"