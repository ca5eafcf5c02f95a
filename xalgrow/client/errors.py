# FILE: xalgrow/client/errors.py
from typing import Any, Dict, Optional


class GenerationError(Exception):
    """A generation call failed.

    ``message`` is the user-facing text (the backend's own message when it
    sent one), ``status_code`` the HTTP status when a response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "status_code": self.status_code}


class TransportError(GenerationError):
    """No usable answer from the backend: network failure or an undecodable body."""
