"""
Enumerations shared by models, schemas and services.
"""
from enum import Enum


class MoodType(str, Enum):
    """Fixed set of mood identifiers a user can pick for a day."""
    VERY_BAD = "very-bad"
    BAD = "bad"
    NEUTRAL = "neutral"
    GOOD = "good"
    GREAT = "great"
    SAD = "sad"
    CALM = "calm"
    STRESSED = "stressed"
    EXCITED = "excited"
    ANGRY = "angry"


class BackupFormat(str, Enum):
    JSON = "json"
    ZIP = "zip"


class ImportPolicy(str, Enum):
    """How an imported entry set is reconciled with local entries."""
    OVERWRITE = "overwrite"
    MERGE = "merge"
