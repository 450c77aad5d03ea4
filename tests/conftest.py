"""
Shared fixtures: throwaway Laravel projects in temporary directories
"""
import shutil
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from laravel_shb.core import CommandRunner


def write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def temp_dir():
    """Create temporary directory"""
    temp = Path(tempfile.mkdtemp())
    yield temp
    if temp.exists():
        shutil.rmtree(temp)


@pytest.fixture
def minimal_project(temp_dir):
    """Project with nothing but a public folder"""
    root = temp_dir / "project"
    write(root / "public" / "index.php", "<?php // original")
    write(root / "public" / "robots.txt", "User-agent: *")
    return root


@pytest.fixture
def laravel_project(temp_dir):
    """Project with the usual Laravel layout"""
    root = temp_dir / "project"

    write(root / "public" / "index.php", "<?php // original")
    write(root / "public" / ".htaccess", "RewriteEngine On")
    write(root / "public" / "favicon.ico", "icon")
    write(root / "public" / "css" / "app.css", "body {}")
    write(root / "public" / "build" / "manifest.json", "{}")

    write(root / "app" / "Models" / "User.php", "<?php class User {}")
    write(root / "bootstrap" / "app.php", "<?php return $app;")
    write(root / "config" / "app.php", "<?php return [];")
    write(root / "database" / "migrations" / "create_users.php", "<?php")
    write(root / "resources" / "views" / "welcome.blade.php", "<h1>Hi</h1>")
    write(root / "routes" / "web.php", "<?php")
    write(root / "vendor" / "autoload.php", "<?php")

    write(root / "storage" / "app" / "public" / "avatar.png", "png")
    write(root / "storage" / "logs" / "laravel.log", "log line")
    write(root / "storage" / "logs" / ".gitignore", "*\n!.gitignore\n")
    write(root / "storage" / "framework" / "down", "maintenance")
    write(root / "storage" / "framework" / ".gitignore", "compiled.php\n")
    write(root / "storage" / "framework" / "cache" / "a.log", "a")
    write(root / "storage" / "framework" / "cache" / "b.log", "b")
    write(root / "storage" / "framework" / "cache" / ".gitignore", "*\n")
    write(root / "storage" / "framework" / "cache" / "data" / "ab" / "entry", "cached")
    write(root / "storage" / "framework" / "sessions" / "sess_1", "session")
    write(root / "storage" / "framework" / "views" / "compiled.php", "<?php")

    write(root / "artisan", "#!/usr/bin/env php")
    write(root / "composer.json", '{"name": "laravel/laravel"}')
    write(root / "composer.lock", "{}")
    write(root / ".env.example", "APP_ENV=local")

    return root


@pytest.fixture
def runner():
    """Stub external command runner"""
    return Mock(spec=CommandRunner)
