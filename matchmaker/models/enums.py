"""
Matchmaker — string enums shared by models, schemas and services.

Columns store the ``.value`` as plain strings.
"""

import enum


class SwipeAction(str, enum.Enum):
    LIKE = "LIKE"
    PASS = "PASS"


class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class ConversationType(str, enum.Enum):
    PRIVATE = "PRIVATE"
    GROUP = "GROUP"


class NotificationType(str, enum.Enum):
    MATCH_CREATED = "MATCH_CREATED"
