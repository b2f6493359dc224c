"""Errors surfaced to the command line."""
from typing import Optional


class CertificateFileError(IOError):
    """A local certificate, key or chain file could not be read."""

    def __init__(self, role: str, path: str, reason: str):
        self.role = role
        self.path = path
        super().__init__(f"failed to read {role}: {path}: {reason}")


class RemoteError(Exception):
    """An IAM API call failed.

    Attributes:
        operation: What was attempted, e.g. "upload certificate"
        code: AWS error code (e.g. "NoSuchEntity"), None for client-side failures
    """

    def __init__(self, operation: str, message: str, code: Optional[str] = None):
        self.operation = operation
        self.code = code
        super().__init__(f"failed to {operation}: {message}")
