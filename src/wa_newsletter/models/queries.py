"""
Fixed structured-query identifiers and result data paths.
"""

from enum import Enum


class QueryId:
    SUBSCRIBED = "6388546374527196"
    JOB_MUTATION = "7150902998257522"
    METADATA = "6620195908089573"
    UNFOLLOW = "7238632346214362"
    FOLLOW = "7871414976211147"
    UNMUTE = "7337137176362961"
    MUTE = "25151904754424642"
    CREATE = "6996806640408138"


class XWAPath:
    SUBSCRIBED = "xwa2_newsletter_subscribed"
    NEWSLETTER = "xwa2_newsletter"
    CREATE = "xwa2_newsletter_create"


class QueryKind(str, Enum):
    """Envelope variant built by the codec."""
    MEX = "mex"                        # w:mex query, caller-supplied variables
    NEWSLETTER_MEX = "newsletter_mex"  # w:mex query scoped by newsletter_id
    NEWSLETTER = "newsletter"          # xmlns=newsletter iq addressed to a jid


class FetchMode(str, Enum):
    INITIAL = "messages"
    INCREMENTAL = "updates"


class DecryptFailurePolicy(str, Enum):
    ABORT = "abort"
    PARTIAL = "partial"
