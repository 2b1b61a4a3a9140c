from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    STORE = "store"
    CONFIGURATION = "configuration"
    NETWORK = "network"
    PROVIDER = "provider"


class JobBoardError(Exception):
    """Base error carrying a kind and a message fit to show a user."""

    kind = ErrorKind.STORE

    def __init__(self, message: str, *, kind: ErrorKind | None = None, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail
        if kind is not None:
            self.kind = kind

    def to_dict(self) -> dict:
        data = {"error": self.message}
        if self.detail:
            data["detail"] = self.detail
        return data


class ValidationError(JobBoardError):
    kind = ErrorKind.VALIDATION


class StoreError(JobBoardError):
    kind = ErrorKind.STORE


class ConfigurationError(JobBoardError):
    kind = ErrorKind.CONFIGURATION


class NetworkError(JobBoardError):
    kind = ErrorKind.NETWORK


class ProviderError(JobBoardError):
    kind = ErrorKind.PROVIDER
