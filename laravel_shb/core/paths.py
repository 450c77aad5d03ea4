"""
Path Resolver - Computes the fixed set of paths used by every stage
"""
from pathlib import Path
from typing import Optional

from laravel_shb.config import ARCHIVE_NAME, OUTPUT_DIR_NAME, PRIVATE_DIR_NAME
from laravel_shb.schemas import BuildPaths


def resolve_paths(
    project_root: Optional[Path] = None,
    output_dir_name: str = OUTPUT_DIR_NAME,
    archive_name: str = ARCHIVE_NAME,
) -> BuildPaths:
    """
    Resolve project, output, private and archive paths

    No filesystem access; the project root defaults to the current directory.
    """
    root = Path(project_root) if project_root is not None else Path.cwd()
    root = root.absolute()
    output_root = root / output_dir_name

    return BuildPaths(
        project_root=root,
        output_root=output_root,
        private_root=output_root / PRIVATE_DIR_NAME,
        archive_path=root / f"{archive_name}.zip",
    )


__all__ = ["resolve_paths"]
