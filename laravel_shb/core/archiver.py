"""
Archive Assembler - Zips the output root into a single deploy archive

Entries are stored relative to the output root (no leading "dist/"), so the
archive can be extracted straight into the hosting account's web root.
The zip is written to a temporary sibling and moved into place only once it
is complete; a failed run never leaves a partial or stale archive behind.
"""
import logging
import os
import zipfile
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .errors import ArchiveError

logger = logging.getLogger(__name__)

PARTIAL_SUFFIX = ".part"


def _write_entries(zf: zipfile.ZipFile, output_root: Path, skip: set) -> int:
    """Add every file and empty directory below output_root; return file count"""
    count = 0
    for root, dirs, files in os.walk(output_root):
        dirs.sort()
        root_path = Path(root)
        rel_root = root_path.relative_to(output_root)

        entries = [name for name in sorted(files) if (root_path / name).resolve() not in skip]
        if not entries and not dirs and rel_root != Path("."):
            zf.write(root_path, f"{rel_root.as_posix()}/")
            continue

        for name in entries:
            full = root_path / name
            arcname = full.relative_to(output_root).as_posix()
            zf.write(full, arcname)
            count += 1
    return count


def assemble_archive(
    output_root: Path,
    archive_path: Path,
    progress_callback: Optional[Callable[[str], None]] = None
) -> Dict[str, Any]:
    """
    Compress the output root into archive_path with maximum compression

    Args:
        output_root: Fully staged dist directory
        archive_path: Destination .zip (replaced if it exists)
        progress_callback: Optional callback for progress updates

    Returns:
        Dictionary with archive path and number of files archived

    Raises:
        ArchiveError: If the output root is missing or writing fails
    """
    output_root = Path(output_root)
    archive_path = Path(archive_path)
    partial_path = archive_path.with_name(archive_path.name + PARTIAL_SUFFIX)

    def log(msg: str):
        if progress_callback:
            progress_callback(msg)
        logger.info(f"[Archiver] {msg}")

    if not output_root.is_dir():
        raise ArchiveError(f"Output folder not found: {output_root}")

    log(f"Creating {archive_path.name}...")
    try:
        for stale in (archive_path, partial_path):
            if stale.exists():
                stale.unlink()

        skip = {archive_path.resolve(), partial_path.resolve()}
        with zipfile.ZipFile(
            partial_path, "w", zipfile.ZIP_DEFLATED, compresslevel=9
        ) as zf:
            count = _write_entries(zf, output_root, skip)

        os.replace(partial_path, archive_path)
    except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
        if partial_path.exists():
            partial_path.unlink()
        raise ArchiveError(f"Failed to create {archive_path.name}: {e}") from e

    log(f"✓ {count} files archived -> {archive_path}")

    return {
        "status": "success",
        "archive_path": str(archive_path),
        "files_archived": count,
    }


__all__ = ["assemble_archive"]
