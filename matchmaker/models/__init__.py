"""
Matchmaker — ORM model registry.

Importing every model here ensures that Alembic (and any other tool that
inspects ``Base.metadata``) discovers all tables automatically.
"""

from matchmaker.models.user import User
from matchmaker.models.profile import DatingPhoto, DatingPreference, DatingProfile
from matchmaker.models.match import Match, Swipe
from matchmaker.models.conversation import Conversation, ConversationParticipant
from matchmaker.models.notification import Notification
from matchmaker.models.block import UserBlock

__all__ = [
    "User",
    "DatingProfile",
    "DatingPhoto",
    "DatingPreference",
    "Match",
    "Swipe",
    "Conversation",
    "ConversationParticipant",
    "Notification",
    "UserBlock",
]
