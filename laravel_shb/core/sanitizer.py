"""
Storage Sanitizer - Removes runtime leftovers from the staged storage tree

Logs, cached data, sessions and compiled views are regenerated by Laravel and
must not ship. Only files directly inside each cleaned folder are removed;
.gitignore markers stay so the empty folders survive deployment.

Cleanup is best-effort: a file that cannot be deleted is logged and skipped.
"""
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from laravel_shb.config import (
    MARKER_FILE_NAME,
    STORAGE_DIR_NAME,
    STORAGE_FOLDERS_TO_CLEAN,
    STORAGE_FRAMEWORK_DIR,
)
from .fileops import fan_out

logger = logging.getLogger(__name__)


def _removable_files(folder: Path) -> List[Path]:
    try:
        return sorted(
            entry for entry in folder.iterdir()
            if entry.is_file() and entry.name != MARKER_FILE_NAME
        )
    except OSError as e:
        logger.warning(f"[Sanitizer] ⚠ Could not list {folder}: {e}")
        return []


def clean_folder(folder: Path, max_workers: int = 8) -> Dict[str, int]:
    """
    Delete every non-marker file directly inside folder

    Returns:
        Counts of removed and failed files
    """
    files = _removable_files(folder)
    outcomes = fan_out(lambda path: path.unlink(), files, max_workers)

    failed = 0
    for path, error in outcomes:
        if error is not None:
            failed += 1
            logger.warning(f"[Sanitizer] ⚠ Could not delete {path}: {error}")

    return {"removed": len(files) - failed, "failed": failed}


def sanitize_storage(
    private_root: Path,
    max_workers: int = 8,
    progress_callback: Optional[Callable[[str], None]] = None
) -> Dict[str, Any]:
    """
    Clean storage/logs and storage/framework/{cache,sessions,views}

    Args:
        private_root: dist/laravel
        max_workers: Thread pool size for deletions
        progress_callback: Optional callback for progress updates

    Returns:
        Dictionary with cleaned folders and removed/failed file counts
    """
    storage_path = Path(private_root) / STORAGE_DIR_NAME

    def log(msg: str):
        if progress_callback:
            progress_callback(msg)
        logger.info(f"[Sanitizer] {msg}")

    log("Cleaning storage folders...")
    if not storage_path.is_dir():
        logger.warning(f"[Sanitizer]   ⚠ {STORAGE_DIR_NAME} folder not found, skipping...")
        return {"status": "skipped", "cleaned": [], "removed": 0, "failed": 0}

    cleaned = []
    removed = 0
    failed = 0

    # Stray files at the framework/ level are cleaned too
    targets = STORAGE_FOLDERS_TO_CLEAN + [STORAGE_FRAMEWORK_DIR]
    for relative in targets:
        folder = storage_path / relative
        if not folder.is_dir():
            continue

        counts = clean_folder(folder, max_workers)
        removed += counts["removed"]
        failed += counts["failed"]
        cleaned.append(relative)
        log(f"  ✓ Cleaned {relative}")

    return {
        "status": "success",
        "cleaned": cleaned,
        "removed": removed,
        "failed": failed,
    }


__all__ = ["clean_folder", "sanitize_storage"]
