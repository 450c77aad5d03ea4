"""
Configuration for the Laravel shared hosting builder
"""
import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

# Paths
BASE_DIR = Path(__file__).parent
TEMPLATES_DIR = BASE_DIR / "templates"

# Output layout
OUTPUT_DIR_NAME = "dist"
ARCHIVE_NAME = "deploy"

# Referenced verbatim by the entry point templates, so it is not configurable
PRIVATE_DIR_NAME = "laravel"

PUBLIC_DIR_NAME = "public"
ENTRY_POINT_NAME = "index.php"
HTACCESS_NAME = ".htaccess"

# Laravel layout
CORE_FOLDERS = [
    "app",
    "bootstrap",
    "config",
    "database",
    "resources",
    "routes",
    "storage",
    "vendor",
]

MANIFEST_FILES = [
    "artisan",
    "composer.json",
    "composer.lock",
    "package.json",
    "package-lock.json",
]

STORAGE_DIR_NAME = "storage"
STORAGE_FOLDERS_TO_CLEAN = [
    "logs",
    "framework/cache",
    "framework/sessions",
    "framework/views",
]
STORAGE_FRAMEWORK_DIR = "framework"
MARKER_FILE_NAME = ".gitignore"

# First match wins
ENV_EXAMPLE_CANDIDATES = [".env.production_example", ".env.example"]
ENV_EXAMPLE_TARGET = ".env.example"

# External commands
COMPOSER_MANIFEST = "composer.json"
NPM_MANIFEST = "package.json"
ARTISAN_SCRIPT = "artisan"

COMPOSER_INSTALL_COMMAND = ["composer", "install", "--no-dev", "--optimize-autoloader"]
NPM_INSTALL_ARGS = ["install"]
NPM_BUILD_ARGS = ["run", "build"]
CACHE_CLEAR_COMMAND = ["php", "artisan", "optimize:clear"]

# Build defaults, overridable per project in .shb.env or via the environment.
# Values stay strings here; BuildConfig validates them.
ENV_FILE_NAME = ".shb.env"

SETTING_DEFAULTS = {
    "SHB_OUTPUT_DIR": OUTPUT_DIR_NAME,
    "SHB_ARCHIVE_NAME": ARCHIVE_NAME,
    "SHB_ENTRY_TEMPLATE": "kernel",
    "SHB_STALE_POLICY": "retain",
    "SHB_COMMAND_TIMEOUT": None,
    "SHB_MAX_WORKERS": "8",
}


def load_settings(project_root: Optional[Path] = None) -> Dict[str, Optional[str]]:
    """
    Resolve SHB_* settings for a project

    Precedence: process environment, then <project_root>/.shb.env, then the
    built-in defaults. The project root defaults to the current directory.
    A project's own .env is never read.
    """
    root = Path(project_root) if project_root is not None else Path.cwd()
    file_values = dotenv_values(root / ENV_FILE_NAME)

    settings = {}
    for key, default in SETTING_DEFAULTS.items():
        value = os.environ.get(key) or file_values.get(key) or default
        settings[key] = value
    return settings
