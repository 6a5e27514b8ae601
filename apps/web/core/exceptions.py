"""Authentication errors shared by every API app."""

from typing import Any


class Unauthorized(Exception):
    """No authenticated actor."""

    status_code = 401
    code = "unauthorized"

    def __init__(self, message: str = "Authentication required") -> None:
        self.message = message
        super().__init__(message)

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code}
