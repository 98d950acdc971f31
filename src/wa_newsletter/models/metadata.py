"""
Newsletter metadata — raw `xwa2_newsletter*` payload shapes and the
flattened MetadataRecord handed to callers.
"""

from typing import Any, Optional
from pydantic import BaseModel, ValidationError, field_validator


class _Payload(BaseModel):
    """Raw server shape. A field of the wrong type reads as absent."""

    @field_validator("*", mode="wrap")
    @classmethod
    def _absent_on_mismatch(cls, value: Any, handler: Any) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None


class TextField(_Payload):
    id: Optional[str] = None
    text: Optional[str] = None
    update_time: Optional[Any] = None


class ImageField(_Payload):
    id: Optional[str] = None
    type: Optional[str] = None
    direct_path: Optional[str] = None


class SettingValue(_Payload):
    value: Optional[Any] = None


class ThreadSettings(_Payload):
    reaction_codes: Optional[SettingValue] = None


class ThreadMetadata(_Payload):
    creation_time: Optional[Any] = None
    name: Optional[TextField] = None
    description: Optional[TextField] = None
    handle: Optional[str] = None
    invite: Optional[str] = None
    picture: Optional[ImageField] = None
    preview: Optional[ImageField] = None
    settings: Optional[ThreadSettings] = None
    subscribers_count: Optional[Any] = None
    verification: Optional[str] = None


class NewsletterState(_Payload):
    type: Optional[str] = None


class NewsletterPayload(_Payload):
    """data.xwa2_newsletter / data.xwa2_newsletter_create"""
    id: Optional[str] = None
    state: Optional[NewsletterState] = None
    thread_metadata: Optional[ThreadMetadata] = None
    viewer_metadata: Optional[dict[str, Any]] = None


class MetadataRecord(BaseModel):
    id: Optional[str] = None
    state: Optional[str] = None
    creation_time: Optional[int] = None
    name: Optional[str] = None
    name_time: Optional[int] = None
    description: Optional[str] = None
    description_time: Optional[int] = None
    invite: Optional[str] = None
    picture: Optional[str] = None
    preview: Optional[str] = None
    reaction_codes: Optional[Any] = None
    subscribers: Optional[int] = None
    verification: Optional[str] = None
    viewer_metadata: Optional[dict[str, Any]] = None
