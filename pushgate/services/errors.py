"""Domain errors raised by the push decision pipeline."""

from http import HTTPStatus


class PushGateError(Exception):
    """Base class for push handling errors surfaced to callers."""


class UnsupportedConsumerError(PushGateError):
    """The target project can neither be triggered nor notified of source updates."""

    status_code: int = HTTPStatus.CONFLICT

    def __init__(self, message: str = "Push Hook is not supported for this project") -> None:
        super().__init__(message)
        self.message = message


class UnmatchableSourceUriError(ValueError):
    """A watched source remote cannot be parsed into a comparable URI."""

    def __init__(self, remote: str | None) -> None:
        super().__init__(f"Cannot parse remote: {remote!r}")
        self.remote = remote
