"""Data models for langbox."""

from langbox.models.activity import (
    ChangedFile,
    CommitOutcome,
    CommitRef,
    FileStatus,
    PushEvent,
    ResolvedCommit,
)
from langbox.models.language import LanguageReport, LanguageStat

__all__ = [
    "PushEvent",
    "CommitRef",
    "ResolvedCommit",
    "ChangedFile",
    "FileStatus",
    "CommitOutcome",
    "LanguageStat",
    "LanguageReport",
]
