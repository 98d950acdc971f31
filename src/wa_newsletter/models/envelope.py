"""
Structured-query request and result envelope models.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

DEFAULT_ERROR_CODE = 400


class QueryRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    query_id: str
    variables: dict[str, Any] = {}


class ErrorItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: Optional[str] = None
    extensions: Optional[dict[str, Any]] = None

    @field_validator("message", mode="before")
    @classmethod
    def _message_text(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    @field_validator("extensions", mode="before")
    @classmethod
    def _extensions_object(cls, value: Any) -> Optional[dict[str, Any]]:
        return value if isinstance(value, dict) else None

    @property
    def code(self) -> int:
        code = (self.extensions or {}).get("error_code")
        try:
            return int(code) if code else DEFAULT_ERROR_CODE
        except (TypeError, ValueError):
            return DEFAULT_ERROR_CODE


class ResultEnvelope(BaseModel):
    """Outer JSON object of a structured-query `result` node.

    `data` is kept as sent; a non-object there simply has no keys to select.
    """
    model_config = ConfigDict(extra="allow")

    data: Optional[Any] = None
    errors: Optional[list[ErrorItem]] = None

    @model_validator(mode="before")
    @classmethod
    def _tolerate_shapes(cls, raw: Any) -> Any:
        if not isinstance(raw, dict):
            return {}
        errors = raw.get("errors")
        if errors is None:
            return raw
        if not isinstance(errors, list):
            return {**raw, "errors": None}
        return {**raw, "errors": [e if isinstance(e, dict) else {"message": e} for e in errors]}
