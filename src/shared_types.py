"""Shared enums for fitox."""

from enum import StrEnum


class TaskCategory(StrEnum):
    HEALTH = "Health"
    STUDY = "Study"
    WORK = "Work"
    PERSONAL = "Personal"


class TaskPriority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ResponseSource(StrEnum):
    """Which tier of the coach pipeline produced a reply."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    FALLBACK = "fallback"
