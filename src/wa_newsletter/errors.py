"""
wa-newsletter error types.

QueryError carries the normalized result of a failed structured query:
the composed message, a numeric status code and the offending payload.
"""

import json
from typing import Any, Optional


class NewsletterError(Exception):
    def __init__(self, code: Any, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class QueryError(NewsletterError):
    def __init__(self, message: str, code: int = 400, data: Optional[Any] = None):
        super().__init__(code, message, data)

    @property
    def data(self) -> Optional[Any]:
        return self.details


class TransportError(NewsletterError):
    def __init__(self, message: str):
        super().__init__("transport_error", message)


class DecryptionError(NewsletterError):
    def __init__(self, message: str, server_id: Optional[str] = None):
        super().__init__("decryption_error", message, {"server_id": server_id} if server_id else None)
        self.server_id = server_id


# Malformed JSON payloads surface unwrapped.
ParseError = json.JSONDecodeError
