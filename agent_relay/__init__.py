"""Relay a conversation between two A2A agents."""

from .client import A2AClient
from .relay import ConversationRelay, Participant, SetupFailure, get_text_from_parts

__all__ = ["A2AClient", "ConversationRelay", "Participant", "SetupFailure", "get_text_from_parts"]
