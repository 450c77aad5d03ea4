"""
Build Pipeline - Orchestrates the shared hosting build

This module wires the core stages together in a fixed order:
Preflight → [Installer] → [Cache] → [Clean] → Prepare → Public Stager →
Entry Point → Private Stager → Sanitizer → Env Template → [Archiver]

Bracketed stages are switched on and off by BuildConfig. Every stage finishes
its filesystem work before the next one starts. The first fatal error stops
the run; whatever was staged so far is left on disk for inspection.

Usage:
    pipeline = BuildPipeline(BuildConfig(clean=True, create_archive=True))
    result = pipeline.run()
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from laravel_shb.config import TEMPLATES_DIR
from laravel_shb.schemas import BuildConfig, BuildResult, StageResult, StageStatus
from laravel_shb.core import (
    BuildError,
    CommandRunner,
    assemble_archive,
    clear_framework_cache,
    install_dependencies,
    propagate_env_template,
    require_public_dir,
    resolve_paths,
    sanitize_storage,
    stage_private_tree,
    stage_public_tree,
    write_entry_point,
)
from laravel_shb.core.fileops import remove_path

logger = logging.getLogger(__name__)


class PipelineError(Exception):
    """Raised when a build stage fails"""

    def __init__(self, message: str, stage: str, result: Optional[BuildResult] = None):
        self.stage = stage
        self.result = result
        super().__init__(message)


StageFunc = Callable[[], Dict[str, Any]]


class BuildPipeline:
    """
    Complete shared hosting build

    Sequences the stages and records a StageResult for each.
    """

    def __init__(
        self,
        config: Optional[BuildConfig] = None,
        project_root: Optional[Path] = None,
        runner: Optional[CommandRunner] = None,
        templates_dir: Path = TEMPLATES_DIR,
        progress_callback: Optional[Callable[[str], None]] = None
    ):
        """
        Initialize pipeline

        Args:
            config: Build options (defaults to BuildConfig())
            project_root: Laravel project directory (defaults to the cwd)
            runner: Runs external commands (defaults to CommandRunner)
            templates_dir: Directory holding the entry point templates
            progress_callback: Optional callback for progress updates
        """
        self.config = config or BuildConfig()
        self.paths = resolve_paths(
            project_root,
            output_dir_name=self.config.output_dir_name,
            archive_name=self.config.archive_name,
        )
        self.runner = runner or CommandRunner(timeout=self.config.command_timeout)
        self.templates_dir = Path(templates_dir)
        self.progress_callback = progress_callback

        self.execution_log: List[str] = []

    def _log(self, msg: str):
        self.execution_log.append(msg)
        if self.progress_callback:
            self.progress_callback(msg)
        logger.info(msg)

    def _stages(self) -> List[Tuple[str, bool, StageFunc]]:
        """(name, enabled, function) for every stage, in execution order"""
        config = self.config
        paths = self.paths
        callback = self.progress_callback
        workers = config.max_workers

        return [
            ("preflight", True, self._preflight),
            ("install", config.install_dependencies,
             lambda: install_dependencies(paths.project_root, self.runner, callback)),
            ("cache", config.clear_cache,
             lambda: clear_framework_cache(paths.project_root, self.runner, callback)),
            ("clean", config.clean, self._clean_output),
            ("prepare", True, self._prepare_output),
            ("public", True,
             lambda: stage_public_tree(paths.project_root, paths.output_root, workers, callback)),
            ("entry_point", True,
             lambda: write_entry_point(
                 paths.output_root, config.entry_template, self.templates_dir, callback)),
            ("private", True,
             lambda: stage_private_tree(
                 paths.project_root, paths.private_root, config.stale_policy, workers, callback)),
            ("sanitize", True,
             lambda: sanitize_storage(paths.private_root, workers, callback)),
            ("env_template", True,
             lambda: propagate_env_template(paths.project_root, paths.private_root, callback)),
            ("archive", config.create_archive,
             lambda: assemble_archive(paths.output_root, paths.archive_path, callback)),
        ]

    def _preflight(self) -> Dict[str, Any]:
        # Fail before anything touches dist/
        require_public_dir(self.paths.project_root)
        return {"status": "success"}

    def _clean_output(self) -> Dict[str, Any]:
        self._log("🧹 Cleaning dist folder...")
        try:
            removed = remove_path(self.paths.output_root)
        except OSError as e:
            raise BuildError(f"Could not clean {self.paths.output_root}: {e}") from e
        return {"status": "success" if removed else "skipped"}

    def _prepare_output(self) -> Dict[str, Any]:
        try:
            self.paths.output_root.mkdir(parents=True, exist_ok=True)
            self.paths.private_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BuildError(f"Could not create {self.paths.private_root}: {e}") from e
        return {"status": "success"}

    def run(self) -> BuildResult:
        """
        Run every enabled stage in order

        Returns:
            BuildResult with one StageResult per stage

        Raises:
            PipelineError: If any stage fails
        """
        result = BuildResult(paths=self.paths)

        self._log("🚀 Starting Laravel shared hosting build...")
        self._log(f"📁 Project root: {self.paths.project_root}")
        self._log(f"📦 Dist folder: {self.paths.output_root}")

        for name, enabled, func in self._stages():
            if not enabled:
                result.stages.append(StageResult(
                    name=name, status=StageStatus.SKIPPED, detail="disabled"
                ))
                continue

            stage = StageResult(name=name, started_at=datetime.now())
            result.stages.append(stage)
            try:
                outcome = func()
            except (BuildError, OSError) as e:
                stage.status = StageStatus.FAILED
                stage.detail = str(e)
                stage.completed_at = datetime.now()
                result.status = "error"
                self._log(f"✗ Stage '{name}' failed")
                raise PipelineError(str(e), stage=name, result=result) from e

            stage.completed_at = datetime.now()
            if outcome.get("status") == "skipped":
                stage.status = StageStatus.SKIPPED

            if name == "archive":
                result.archive_path = Path(outcome["archive_path"])

        self._log("✅ Build completed successfully!")
        self._log(f"📦 Ready to deploy to shared hosting from: {self.paths.output_root}")
        if result.archive_path:
            self._log(f"🗜 Archive: {result.archive_path}")

        return result

    def get_execution_log(self) -> list:
        """Get execution log"""
        return self.execution_log.copy()


# Convenience function for simple usage
def build(
    config: Optional[BuildConfig] = None,
    project_root: Optional[Path] = None,
    runner: Optional[CommandRunner] = None,
    progress_callback: Optional[Callable[[str], None]] = None
) -> BuildResult:
    """
    Build a Laravel project for shared hosting (convenience function)

    Raises:
        PipelineError: If any stage fails
    """
    pipeline = BuildPipeline(
        config=config,
        project_root=project_root,
        runner=runner,
        progress_callback=progress_callback,
    )
    return pipeline.run()


__all__ = [
    "BuildPipeline",
    "build",
    "PipelineError",
]
