"""
Cache Invalidator - Clears Laravel's cached config, routes and views
"""
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from laravel_shb.config import ARTISAN_SCRIPT, CACHE_CLEAR_COMMAND
from .runner import CommandRunner

logger = logging.getLogger(__name__)


def clear_framework_cache(
    project_root: Path,
    runner: CommandRunner,
    progress_callback: Optional[Callable[[str], None]] = None
) -> Dict[str, Any]:
    """
    Run `php artisan optimize:clear` if the project has an artisan script

    Raises:
        CommandError: If the command fails
    """
    project_root = Path(project_root)

    def log(msg: str):
        if progress_callback:
            progress_callback(msg)
        logger.info(f"[Cache] {msg}")

    if not (project_root / ARTISAN_SCRIPT).exists():
        log(f"⚠ {ARTISAN_SCRIPT} not found, skipping cache clear")
        return {"status": "skipped"}

    log("Clearing framework caches...")
    runner.run(CACHE_CLEAR_COMMAND, cwd=project_root)
    log("✓ Framework caches cleared")

    return {"status": "success", "command": " ".join(CACHE_CLEAR_COMMAND)}


__all__ = ["clear_framework_cache"]
