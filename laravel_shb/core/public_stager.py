"""
Public Tree Stager - Copies public/ into the output root

The original public/index.php is left out; the Entry Point Generator writes a
replacement that points into the private directory.
"""
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from laravel_shb.config import ENTRY_POINT_NAME, HTACCESS_NAME, PUBLIC_DIR_NAME
from .errors import PreconditionError, StagingError
from .fileops import copy_file, copy_tree

logger = logging.getLogger(__name__)


def require_public_dir(project_root: Path) -> Path:
    """
    Return the project's public directory

    Raises:
        PreconditionError: If it does not exist
    """
    public_path = Path(project_root) / PUBLIC_DIR_NAME
    if not public_path.is_dir():
        raise PreconditionError(
            f"{PUBLIC_DIR_NAME} folder not found. Are you in a Laravel project root?"
        )
    return public_path


def stage_public_tree(
    project_root: Path,
    output_root: Path,
    max_workers: int = 8,
    progress_callback: Optional[Callable[[str], None]] = None
) -> Dict[str, Any]:
    """
    Copy public assets and .htaccess into the output root

    Args:
        project_root: Laravel project directory
        output_root: Build output directory (dist)
        max_workers: Thread pool size for file copies
        progress_callback: Optional callback for progress updates

    Returns:
        Dictionary with copied file count and whether .htaccess was found

    Raises:
        PreconditionError: If public/ is missing
        StagingError: If a file cannot be copied
    """
    output_root = Path(output_root)

    def log(msg: str):
        if progress_callback:
            progress_callback(msg)
        logger.info(f"[PublicStager] {msg}")

    public_path = require_public_dir(project_root)

    log("Copying public files...")
    copied = copy_tree(
        public_path,
        output_root,
        exclude_names={ENTRY_POINT_NAME},
        max_workers=max_workers,
    )
    log(f"✓ {copied} public files copied")

    log(f"Copying {HTACCESS_NAME}...")
    htaccess_src = public_path / HTACCESS_NAME
    htaccess_copied = False
    if htaccess_src.is_file():
        try:
            copy_file(htaccess_src, output_root / HTACCESS_NAME)
        except OSError as e:
            raise StagingError(f"Could not copy {HTACCESS_NAME}: {e}") from e
        htaccess_copied = True
        log(f"✓ {HTACCESS_NAME} copied")
    else:
        logger.warning(f"[PublicStager] ⚠ {HTACCESS_NAME} not found in public folder")

    return {
        "status": "success",
        "files_copied": copied,
        "htaccess_copied": htaccess_copied,
    }


__all__ = ["require_public_dir", "stage_public_tree"]
