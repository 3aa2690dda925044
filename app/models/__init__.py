# Import all models for easy access
from .enums import BackupFormat, ImportPolicy, MoodType
from .mood_entry import MoodDraft, MoodEntry

__all__ = [
    "BackupFormat",
    "ImportPolicy",
    "MoodDraft",
    "MoodEntry",
    "MoodType",
]
