"""
Build Schema - Configuration and results of a build

BuildConfig is created once from CLI input and never mutated.
BuildPaths is derived from the working directory by the Path Resolver.
StageResult / BuildResult record what each pipeline stage did.
"""
from typing import List, Optional
from pathlib import Path
from enum import Enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EntryTemplate(str, Enum):
    """Entry point bootstrap convention"""
    KERNEL = "kernel"              # HTTP kernel bootstrap (Laravel <= 10)
    APPLICATION = "application"    # $app->handleRequest() (Laravel >= 11)


class StalePolicy(str, Enum):
    """What happens to previously staged private files on a non-clean rerun"""
    RETAIN = "retain"
    MIRROR = "mirror"


class StageStatus(str, Enum):
    """Stage execution status"""
    COMPLETED = "COMPLETED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


class BuildConfig(BaseModel):
    """Options for a single build run"""
    model_config = ConfigDict(frozen=True)

    clean: bool = Field(False, description="Delete the output root before staging")
    install_dependencies: bool = Field(False, description="Run composer/npm before staging")
    clear_cache: bool = Field(False, description="Run artisan optimize:clear before staging")
    create_archive: bool = Field(False, description="Zip the output root after staging")

    entry_template: EntryTemplate = Field(EntryTemplate.KERNEL)
    stale_policy: StalePolicy = Field(StalePolicy.RETAIN)

    command_timeout: Optional[float] = Field(None, gt=0, description="Seconds; None waits forever")
    max_workers: int = Field(8, ge=1, description="Thread pool size for file fan-out")

    output_dir_name: str = Field("dist", min_length=1)
    archive_name: str = Field("deploy", min_length=1)


class BuildPaths(BaseModel):
    """Absolute paths shared by every stage"""
    model_config = ConfigDict(frozen=True)

    project_root: Path
    output_root: Path
    private_root: Path
    archive_path: Path


class StageResult(BaseModel):
    """Outcome of one pipeline stage"""
    name: str
    status: StageStatus = Field(StageStatus.COMPLETED)
    detail: Optional[str] = Field(None)
    started_at: Optional[datetime] = Field(None)
    completed_at: Optional[datetime] = Field(None)


class BuildResult(BaseModel):
    """Outcome of a complete build"""
    status: str = Field("success")
    paths: BuildPaths
    stages: List[StageResult] = Field(default_factory=list)
    archive_path: Optional[Path] = Field(None)

    def get_stage(self, name: str) -> Optional[StageResult]:
        """Get stage result by name"""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None


__all__ = [
    "EntryTemplate",
    "StalePolicy",
    "StageStatus",
    "BuildConfig",
    "BuildPaths",
    "StageResult",
    "BuildResult",
]
