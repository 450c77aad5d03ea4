"""
Environment Template Propagator - Ships an .env.example with the build
"""
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from laravel_shb.config import ENV_EXAMPLE_CANDIDATES, ENV_EXAMPLE_TARGET
from .errors import StagingError
from .fileops import copy_file

logger = logging.getLogger(__name__)


def propagate_env_template(
    project_root: Path,
    private_root: Path,
    progress_callback: Optional[Callable[[str], None]] = None
) -> Dict[str, Any]:
    """
    Copy the first existing env example into dist/laravel/.env.example

    .env.production_example takes priority over .env.example.
    """
    def log(msg: str):
        if progress_callback:
            progress_callback(msg)
        logger.info(f"[EnvTemplate] {msg}")

    log(f"Copying {ENV_EXAMPLE_TARGET}...")
    for name in ENV_EXAMPLE_CANDIDATES:
        source_path = Path(project_root) / name
        if not source_path.is_file():
            continue

        try:
            copy_file(source_path, Path(private_root) / ENV_EXAMPLE_TARGET)
        except OSError as e:
            raise StagingError(f"Could not copy {name}: {e}") from e
        log(f"  ✓ {name} copied as {ENV_EXAMPLE_TARGET}")
        return {"status": "success", "source": name}

    logger.warning(
        f"[EnvTemplate]   ⚠ No {' or '.join(reversed(ENV_EXAMPLE_CANDIDATES))} found, skipping..."
    )
    return {"status": "skipped", "source": None}


__all__ = ["propagate_env_template"]
