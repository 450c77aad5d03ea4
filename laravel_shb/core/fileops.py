"""
File operations shared by the staging stages

Copies and deletions inside one stage have no ordering between siblings, so
they fan out on a thread pool. Every call joins its pool before returning:
all operations finish (or fail) before the stage moves on.
"""
import logging
import os
import shutil
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

from .errors import StagingError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def fan_out(
    func: Callable[[T], object],
    items: Iterable[T],
    max_workers: int = 8,
) -> List[Tuple[T, Optional[Exception]]]:
    """
    Apply func to every item concurrently and wait for all of them

    Returns:
        (item, error) pairs in input order; error is None on success
    """
    items = list(items)
    if not items:
        return []

    # Small batches are not worth a pool
    if len(items) <= 2 or max_workers <= 1:
        outcomes = []
        for item in items:
            try:
                func(item)
                outcomes.append((item, None))
            except Exception as e:
                outcomes.append((item, e))
        return outcomes

    errors = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_index = {
            executor.submit(func, item): index
            for index, item in enumerate(items)
        }
        for future in as_completed(future_to_index):
            index = future_to_index[future]
            try:
                future.result()
            except Exception as e:
                errors[index] = e

    return [(item, errors.get(index)) for index, item in enumerate(items)]


def copy_file(src: Path, dst: Path) -> None:
    """Copy one file, creating parent directories and overwriting dst"""
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dst)


def _collect_files(
    src: Path,
    dst: Path,
    exclude_names: frozenset,
    ancestors: frozenset = frozenset(),
) -> List[Tuple[Path, Path]]:
    """
    Mirror src's directories under dst and list the files to copy

    Directory symlinks are followed unless they point back at one of their
    own ancestors. Dangling symlinks are skipped with a warning.
    """
    real_src = os.path.realpath(src)
    if real_src in ancestors:
        logger.warning(f"[Copy] ⚠ Skipping symlink loop: {src}")
        return []
    ancestors = ancestors | {real_src}

    dst.mkdir(parents=True, exist_ok=True)

    pairs = []
    with os.scandir(src) as it:
        entries = sorted(it, key=lambda entry: entry.name)

    for entry in entries:
        source_path = Path(entry.path)
        if entry.is_dir():
            pairs.extend(_collect_files(
                source_path, dst / entry.name, exclude_names, ancestors
            ))
        elif entry.is_file():
            if entry.name not in exclude_names:
                pairs.append((source_path, dst / entry.name))
        elif entry.is_symlink():
            target = os.readlink(entry.path)
            logger.warning(f"[Copy] ⚠ Skipping dangling symlink: {source_path} -> {target}")

    return pairs


def copy_tree(
    src: Path,
    dst: Path,
    exclude_names: Iterable[str] = (),
    max_workers: int = 8,
) -> int:
    """
    Recursively copy src into dst, overwriting existing files

    Files whose basename is in exclude_names are skipped at any depth.
    Symlinks are followed, so the copy contains regular files only;
    dangling links and links back to an ancestor directory are skipped.

    Returns:
        Number of files copied

    Raises:
        StagingError: If any file could not be copied
    """
    src = Path(src)
    dst = Path(dst)

    try:
        pairs = _collect_files(src, dst, frozenset(exclude_names))
    except OSError as e:
        raise StagingError(f"Could not copy {src} to {dst}: {e}") from e

    outcomes = fan_out(lambda pair: copy_file(*pair), pairs, max_workers)
    failures = [(pair, error) for pair, error in outcomes if error is not None]
    if failures:
        (failed_src, _), first_error = failures[0]
        raise StagingError(
            f"Failed to copy {len(failures)} file(s) from {src}; "
            f"first failure: {failed_src}: {first_error}"
        )

    return len(pairs)


def remove_path(path: Path) -> bool:
    """Delete a file, symlink or directory tree; return False if nothing was there"""
    path = Path(path)
    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if path.is_dir():
        shutil.rmtree(path)
        return True
    return False


__all__ = ["fan_out", "copy_file", "copy_tree", "remove_path"]
