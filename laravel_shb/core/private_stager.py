"""
Private Tree Stager - Relocates Laravel internals into dist/laravel

Copies the core folders (app, bootstrap, config, ... vendor) and the
composer/npm manifests next to them. Anything missing is skipped.

With StalePolicy.MIRROR each staged entry is replaced wholesale and entries
whose source was removed from the project are deleted. With RETAIN (the
default) files are overwritten in place and stale copies survive.
"""
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from laravel_shb.config import CORE_FOLDERS, MANIFEST_FILES
from laravel_shb.schemas import StalePolicy
from .errors import StagingError
from .fileops import copy_file, copy_tree, remove_path

logger = logging.getLogger(__name__)


def _remove_stale(path: Path, log: Callable[[str], None]) -> bool:
    try:
        removed = remove_path(path)
    except OSError as e:
        raise StagingError(f"Could not remove stale {path}: {e}") from e
    if removed:
        log(f"  - Removed stale {path.name}")
    return removed


def copy_core_folders(
    project_root: Path,
    private_root: Path,
    stale_policy: StalePolicy = StalePolicy.RETAIN,
    max_workers: int = 8,
    log: Callable[[str], None] = lambda msg: None
) -> Dict[str, List[str]]:
    """Copy each Laravel core folder that exists in the project"""
    mirror = StalePolicy(stale_policy) == StalePolicy.MIRROR
    copied, skipped, removed = [], [], []

    for folder in CORE_FOLDERS:
        source_path = Path(project_root) / folder
        dest_path = Path(private_root) / folder

        if not source_path.is_dir():
            logger.warning(f"[PrivateStager]   ⚠ {folder} folder not found, skipping...")
            skipped.append(folder)
            if mirror and _remove_stale(dest_path, log):
                removed.append(folder)
            continue

        if mirror:
            _remove_stale(dest_path, log)

        log(f"  - Copying {folder}...")
        copy_tree(source_path, dest_path, max_workers=max_workers)
        copied.append(folder)

    return {"copied": copied, "skipped": skipped, "removed": removed}


def copy_manifest_files(
    project_root: Path,
    private_root: Path,
    stale_policy: StalePolicy = StalePolicy.RETAIN,
    log: Callable[[str], None] = lambda msg: None
) -> Dict[str, List[str]]:
    """Copy artisan and the composer/npm manifests that exist in the project"""
    mirror = StalePolicy(stale_policy) == StalePolicy.MIRROR
    copied, skipped, removed = [], [], []

    for name in MANIFEST_FILES:
        source_path = Path(project_root) / name
        dest_path = Path(private_root) / name

        if not source_path.is_file():
            logger.warning(f"[PrivateStager]   ⚠ {name} not found, skipping...")
            skipped.append(name)
            if mirror and _remove_stale(dest_path, log):
                removed.append(name)
            continue

        try:
            copy_file(source_path, dest_path)
        except OSError as e:
            raise StagingError(f"Could not copy {name}: {e}") from e
        log(f"  ✓ {name} copied")
        copied.append(name)

    return {"copied": copied, "skipped": skipped, "removed": removed}


def stage_private_tree(
    project_root: Path,
    private_root: Path,
    stale_policy: StalePolicy = StalePolicy.RETAIN,
    max_workers: int = 8,
    progress_callback: Optional[Callable[[str], None]] = None
) -> Dict[str, Any]:
    """
    Copy core folders and manifest files into the private root

    Args:
        project_root: Laravel project directory
        private_root: dist/laravel
        stale_policy: RETAIN or MIRROR previously staged entries
        max_workers: Thread pool size for file copies
        progress_callback: Optional callback for progress updates

    Returns:
        Dictionary with copied/skipped/removed folder and file names

    Raises:
        StagingError: If a copy or stale removal fails
    """
    private_root = Path(private_root)

    def log(msg: str):
        if progress_callback:
            progress_callback(msg)
        logger.info(f"[PrivateStager] {msg}")

    private_root.mkdir(parents=True, exist_ok=True)

    log("Copying Laravel core folders...")
    folders = copy_core_folders(project_root, private_root, stale_policy, max_workers, log)

    log("Copying composer files...")
    manifests = copy_manifest_files(project_root, private_root, stale_policy, log)

    return {
        "status": "success",
        "folders": folders,
        "manifests": manifests,
    }


__all__ = ["copy_core_folders", "copy_manifest_files", "stage_private_tree"]
