"""
Metadata projector — `result` payloads to flat MetadataRecords.

The standard fetch and the creation flow nest the same newsletter shape
under different top-level keys; each has its own accessor below.
"""

from typing import Any, Optional

from wa_newsletter.coerce import coerce_int
from wa_newsletter.media import get_url_from_direct_path
from wa_newsletter.models.envelope import ResultEnvelope
from wa_newsletter.models.metadata import ImageField, MetadataRecord, NewsletterPayload, TextField, ThreadMetadata
from wa_newsletter.models.node import BinaryNode
from wa_newsletter.models.queries import XWAPath
from wa_newsletter.transport.envelope import parse_result_envelope, result_payload


def _result_envelope(node: BinaryNode) -> ResultEnvelope:
    return parse_result_envelope(result_payload(node) or b"")


def _payload_at(envelope: ResultEnvelope, path: str) -> Optional[NewsletterPayload]:
    data = envelope.data if isinstance(envelope.data, dict) else {}
    raw = data.get(path)
    if not isinstance(raw, dict):
        return None
    return NewsletterPayload.model_validate(raw)


def newsletter_payload(envelope: ResultEnvelope) -> Optional[NewsletterPayload]:
    """data.xwa2_newsletter — standard metadata fetch."""
    return _payload_at(envelope, XWAPath.NEWSLETTER)


def created_newsletter_payload(envelope: ResultEnvelope) -> Optional[NewsletterPayload]:
    """data.xwa2_newsletter_create — creation flow."""
    return _payload_at(envelope, XWAPath.CREATE)


def _picture_url(image: Optional[ImageField]) -> str:
    return get_url_from_direct_path((image.direct_path if image else None) or "")


def project(payload: Optional[NewsletterPayload]) -> MetadataRecord:
    payload = payload or NewsletterPayload()
    thread = payload.thread_metadata or ThreadMetadata()
    name = thread.name or TextField()
    description = thread.description or TextField()
    reaction_codes: Any = thread.settings.reaction_codes if thread.settings else None

    return MetadataRecord(
        id=payload.id,
        state=payload.state.type if payload.state else None,
        creation_time=coerce_int("creation_time", thread.creation_time),
        name=name.text,
        name_time=coerce_int("name_time", name.update_time),
        description=description.text,
        description_time=coerce_int("description_time", description.update_time),
        invite=thread.invite,
        picture=_picture_url(thread.picture),
        preview=_picture_url(thread.preview),
        reaction_codes=reaction_codes.value if reaction_codes else None,
        subscribers=coerce_int("subscribers", thread.subscribers_count),
        verification=thread.verification,
        viewer_metadata=payload.viewer_metadata,
    )


def extract_newsletter_metadata(node: BinaryNode, is_create: bool = False) -> MetadataRecord:
    """Project a metadata or creation response into a MetadataRecord.

    Missing nested fields project to None. Malformed JSON in the `result`
    node raises json.JSONDecodeError.
    """
    envelope = _result_envelope(node)
    accessor = created_newsletter_payload if is_create else newsletter_payload
    return project(accessor(envelope))
