"""
Entry Point Generator - Writes dist/index.php

The bundled template for the selected bootstrap convention is written as-is.
If the template file is not shipped, a built-in copy of the same variant is
used instead. Nothing is substituted into the template text.
"""
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from laravel_shb.config import ENTRY_POINT_NAME, TEMPLATES_DIR
from laravel_shb.schemas import EntryTemplate
from .errors import StagingError

logger = logging.getLogger(__name__)


KERNEL_TEMPLATE = r"""<?php

define('LARAVEL_START', microtime(true));

if (file_exists(__DIR__ . '/laravel/storage/framework/maintenance.php')) {
    require __DIR__ . '/laravel/storage/framework/maintenance.php';
}

require __DIR__ . '/laravel/vendor/autoload.php';

$app = require_once __DIR__ . '/laravel/bootstrap/app.php';

$app->bind('request', function () {
    return Illuminate\Http\Request::capture();
});

$kernel = $app->make(Illuminate\Contracts\Http\Kernel::class);

$response = $kernel->handle(
    $request = Illuminate\Http\Request::capture()
);

$response->send();

$kernel->terminate($request, $response);
"""

APPLICATION_TEMPLATE = r"""<?php

use Illuminate\Http\Request;

define('LARAVEL_START', microtime(true));

// Determine if the application is in maintenance mode...
if (file_exists($maintenance = __DIR__ . '/laravel/storage/framework/maintenance.php')) {
    require $maintenance;
}

// Register the Composer autoloader...
require __DIR__ . '/laravel/vendor/autoload.php';

// Bootstrap Laravel and handle the request...
(require_once __DIR__ . '/laravel/bootstrap/app.php')
    ->handleRequest(Request::capture());
"""

DEFAULT_TEMPLATES = {
    EntryTemplate.KERNEL: KERNEL_TEMPLATE,
    EntryTemplate.APPLICATION: APPLICATION_TEMPLATE,
}


def template_filename(template: EntryTemplate) -> str:
    """Bundled template file name, e.g. index.kernel.php"""
    return f"index.{EntryTemplate(template).value}.php"


def load_template(
    template: EntryTemplate = EntryTemplate.KERNEL,
    templates_dir: Path = TEMPLATES_DIR
) -> str:
    """Read the bundled template, falling back to the built-in copy"""
    template = EntryTemplate(template)
    template_path = Path(templates_dir) / template_filename(template)

    if template_path.is_file():
        return template_path.read_text(encoding="utf-8")

    logger.debug(f"[EntryPoint] {template_path} not found, using built-in template")
    return DEFAULT_TEMPLATES[template]


def write_entry_point(
    output_root: Path,
    template: EntryTemplate = EntryTemplate.KERNEL,
    templates_dir: Path = TEMPLATES_DIR,
    progress_callback: Optional[Callable[[str], None]] = None
) -> Dict[str, Any]:
    """
    Create dist/index.php, replacing any existing file

    Raises:
        StagingError: If the file cannot be written
    """
    template = EntryTemplate(template)
    index_path = Path(output_root) / ENTRY_POINT_NAME

    def log(msg: str):
        if progress_callback:
            progress_callback(msg)
        logger.info(f"[EntryPoint] {msg}")

    log(f"Creating {ENTRY_POINT_NAME} ({template.value} bootstrap)...")
    try:
        content = load_template(template, templates_dir)
        index_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise StagingError(f"Could not write {index_path}: {e}") from e
    log(f"✓ {ENTRY_POINT_NAME} created")

    return {
        "status": "success",
        "entry_point_path": str(index_path),
        "template": template.value,
    }


__all__ = [
    "DEFAULT_TEMPLATES",
    "template_filename",
    "load_template",
    "write_entry_point",
]
