"""Chat messaging pipeline -- event records, trigger resolution, dispatch, gateway.

The dispatcher and gateway are imported from their modules directly; only
the dependency-free pieces are re-exported here.
"""

from .trigger import TriggerResult, humanize_bot_mentions, mention_tag, resolve_trigger
from .types import GatewaySession, IncomingMessage, IncomingReaction

__all__ = [
    "GatewaySession",
    "IncomingMessage",
    "IncomingReaction",
    "TriggerResult",
    "humanize_bot_mentions",
    "mention_tag",
    "resolve_trigger",
]
