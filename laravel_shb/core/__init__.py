"""
Core Build Stages

Each stage performs one step of turning a Laravel project into a
shared-hosting deploy tree:
1. Installer - composer / npm install and asset build
2. Cache - artisan optimize:clear
3. Public Stager - public/ -> dist/
4. Entry Point - dist/index.php
5. Private Stager - core folders -> dist/laravel/
6. Sanitizer - clean storage/ runtime files
7. Env Template - .env.example
8. Archiver - dist/ -> deploy.zip
"""
from .errors import (
    BuildError,
    PreconditionError,
    CommandError,
    InstallError,
    StagingError,
    ArchiveError,
)
from .runner import CommandRunner
from .paths import resolve_paths
from .installer import install_dependencies
from .cache import clear_framework_cache
from .public_stager import require_public_dir, stage_public_tree
from .entry_point import write_entry_point
from .private_stager import stage_private_tree
from .sanitizer import sanitize_storage
from .env_template import propagate_env_template
from .archiver import assemble_archive

__all__ = [
    "BuildError",
    "PreconditionError",
    "CommandError",
    "InstallError",
    "StagingError",
    "ArchiveError",
    "CommandRunner",
    "resolve_paths",
    "install_dependencies",
    "clear_framework_cache",
    "require_public_dir",
    "stage_public_tree",
    "write_entry_point",
    "stage_private_tree",
    "sanitize_storage",
    "propagate_env_template",
    "assemble_archive",
]
