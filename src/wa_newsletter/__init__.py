"""
wa-newsletter — structured queries and update sync for WhatsApp newsletters.

Runs w:mex structured queries over a binary-node transport, parses message
and update fetches into typed records and projects newsletter metadata.
"""

from wa_newsletter.client import NewsletterClient, AsyncNewsletterClient
from wa_newsletter.newsletter import NewsletterAPI
from wa_newsletter.executor import QueryExecutor
from wa_newsletter.updates import UpdateParser, parse_fetched_updates
from wa_newsletter.metadata import extract_newsletter_metadata
from wa_newsletter.autofollow import AutoFollowTask
from wa_newsletter.errors import NewsletterError, QueryError, TransportError, DecryptionError, ParseError
from wa_newsletter.models.queries import DecryptFailurePolicy, FetchMode, QueryId, QueryKind, XWAPath
from wa_newsletter.models.node import BinaryNode
from wa_newsletter.models.update import ReactionRecord, UpdateRecord
from wa_newsletter.models.metadata import MetadataRecord

__version__ = "0.1.0"
__all__ = [
    "NewsletterClient",
    "AsyncNewsletterClient",
    "NewsletterAPI",
    "QueryExecutor",
    "UpdateParser",
    "parse_fetched_updates",
    "extract_newsletter_metadata",
    "AutoFollowTask",
    "NewsletterError",
    "QueryError",
    "TransportError",
    "DecryptionError",
    "ParseError",
    "DecryptFailurePolicy",
    "FetchMode",
    "QueryId",
    "QueryKind",
    "XWAPath",
    "BinaryNode",
    "ReactionRecord",
    "UpdateRecord",
    "MetadataRecord",
]
