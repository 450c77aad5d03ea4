"""
Dependency Installer - Runs composer and npm before staging

Each package manager runs only when its manifest exists in the project root.
A missing manifest is a skip; a failing command stops the build.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from laravel_shb.config import (
    COMPOSER_INSTALL_COMMAND,
    COMPOSER_MANIFEST,
    NPM_BUILD_ARGS,
    NPM_INSTALL_ARGS,
    NPM_MANIFEST,
)
from .errors import InstallError
from .runner import CommandRunner

logger = logging.getLogger(__name__)


def _npm_executable() -> str:
    return "npm.cmd" if os.name == "nt" else "npm"


def _has_build_script(manifest_path: Path) -> bool:
    """Check whether package.json declares a "build" script"""
    try:
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise InstallError(f"Could not read {manifest_path.name}: {e}") from e

    scripts = manifest.get("scripts") if isinstance(manifest, dict) else None
    return isinstance(scripts, dict) and "build" in scripts


def install_dependencies(
    project_root: Path,
    runner: CommandRunner,
    progress_callback: Optional[Callable[[str], None]] = None
) -> Dict[str, Any]:
    """
    Install composer and npm dependencies

    Args:
        project_root: Laravel project directory
        runner: Runs external commands
        progress_callback: Optional callback for progress updates

    Returns:
        Dictionary with status and the commands that ran

    Raises:
        CommandError: If composer or npm fails
        InstallError: If package.json cannot be parsed
    """
    project_root = Path(project_root)
    commands = []

    def log(msg: str):
        if progress_callback:
            progress_callback(msg)
        logger.info(f"[Installer] {msg}")

    def run(command):
        runner.run(command, cwd=project_root)
        commands.append(" ".join(command))

    if (project_root / COMPOSER_MANIFEST).exists():
        log("Installing composer dependencies...")
        run(COMPOSER_INSTALL_COMMAND)
        log("✓ Composer dependencies installed")
    else:
        log(f"⚠ {COMPOSER_MANIFEST} not found, skipping composer install")

    npm_manifest = project_root / NPM_MANIFEST
    if npm_manifest.exists():
        has_build = _has_build_script(npm_manifest)
        npm = _npm_executable()

        log("Installing npm dependencies...")
        run([npm, *NPM_INSTALL_ARGS])
        log("✓ npm dependencies installed")

        if has_build:
            log("Building frontend assets...")
            run([npm, *NPM_BUILD_ARGS])
            log("✓ Frontend assets built")
        else:
            log("No build script in package.json, skipping asset build")
    else:
        log(f"⚠ {NPM_MANIFEST} not found, skipping npm install")

    return {
        "status": "success" if commands else "skipped",
        "commands": commands,
    }


__all__ = ["install_dependencies"]
