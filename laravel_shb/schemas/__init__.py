"""
Schemas for the shared hosting build pipeline
"""
from .build_schema import (
    EntryTemplate,
    StalePolicy,
    StageStatus,
    BuildConfig,
    BuildPaths,
    StageResult,
    BuildResult,
)

__all__ = [
    "EntryTemplate",
    "StalePolicy",
    "StageStatus",
    "BuildConfig",
    "BuildPaths",
    "StageResult",
    "BuildResult",
]
