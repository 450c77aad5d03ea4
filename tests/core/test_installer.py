"""
Tests for the Dependency Installer and Cache Invalidator

External commands go through a Mock runner, so nothing is spawned.
"""
import json
import subprocess
from unittest.mock import call, patch

import pytest

from laravel_shb.config import CACHE_CLEAR_COMMAND, COMPOSER_INSTALL_COMMAND
from laravel_shb.core import (
    CommandError,
    CommandRunner,
    InstallError,
    clear_framework_cache,
    install_dependencies,
)
from laravel_shb.core.installer import _npm_executable
from tests.conftest import write


class TestInstallDependencies:
    """Test composer/npm invocation"""

    def test_no_manifests_skips_everything(self, minimal_project, runner):
        result = install_dependencies(minimal_project, runner)

        assert result["status"] == "skipped"
        runner.run.assert_not_called()

    def test_composer_only(self, minimal_project, runner):
        write(minimal_project / "composer.json", "{}")

        result = install_dependencies(minimal_project, runner)

        assert result["status"] == "success"
        runner.run.assert_called_once_with(COMPOSER_INSTALL_COMMAND, cwd=minimal_project)

    def test_npm_without_build_script(self, minimal_project, runner):
        write(minimal_project / "package.json", json.dumps({"scripts": {"dev": "vite"}}))

        install_dependencies(minimal_project, runner)

        npm = _npm_executable()
        runner.run.assert_called_once_with([npm, "install"], cwd=minimal_project)

    def test_npm_with_build_script_runs_after_install(self, minimal_project, runner):
        write(minimal_project / "composer.json", "{}")
        write(minimal_project / "package.json", json.dumps({"scripts": {"build": "vite build"}}))

        result = install_dependencies(minimal_project, runner)

        npm = _npm_executable()
        assert runner.run.call_args_list == [
            call(COMPOSER_INSTALL_COMMAND, cwd=minimal_project),
            call([npm, "install"], cwd=minimal_project),
            call([npm, "run", "build"], cwd=minimal_project),
        ]
        assert len(result["commands"]) == 3

    def test_command_failure_propagates(self, minimal_project, runner):
        write(minimal_project / "composer.json", "{}")
        write(minimal_project / "package.json", "{}")
        runner.run.side_effect = CommandError(["composer"], "Command failed: composer (exit code 1)", 1)

        with pytest.raises(CommandError, match="exit code 1"):
            install_dependencies(minimal_project, runner)

        # npm never runs after composer fails
        assert runner.run.call_count == 1

    def test_invalid_package_json(self, minimal_project, runner):
        write(minimal_project / "package.json", "{not json")

        with pytest.raises(InstallError):
            install_dependencies(minimal_project, runner)
        runner.run.assert_not_called()

    def test_progress_callback(self, minimal_project, runner):
        messages = []
        install_dependencies(minimal_project, runner, progress_callback=messages.append)

        assert any("composer.json not found" in m for m in messages)
        assert any("package.json not found" in m for m in messages)


class TestClearFrameworkCache:
    """Test artisan cache clearing"""

    def test_skips_without_artisan(self, minimal_project, runner):
        result = clear_framework_cache(minimal_project, runner)

        assert result["status"] == "skipped"
        runner.run.assert_not_called()

    def test_runs_optimize_clear(self, laravel_project, runner):
        result = clear_framework_cache(laravel_project, runner)

        assert result["status"] == "success"
        runner.run.assert_called_once_with(CACHE_CLEAR_COMMAND, cwd=laravel_project)

    def test_failure_propagates(self, laravel_project, runner):
        runner.run.side_effect = CommandError(CACHE_CLEAR_COMMAND, "Command failed", 255)

        with pytest.raises(CommandError):
            clear_framework_cache(laravel_project, runner)


class TestCommandRunner:
    """Test the subprocess-backed runner"""

    def test_success(self, temp_dir):
        with patch("laravel_shb.core.runner.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(["php"], 0)
            CommandRunner(timeout=5).run(["php", "-v"], cwd=temp_dir)

        mock_run.assert_called_once_with(["php", "-v"], cwd=temp_dir, timeout=5)

    def test_nonzero_exit(self, temp_dir):
        with patch("laravel_shb.core.runner.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(["composer"], 2)
            with pytest.raises(CommandError) as exc_info:
                CommandRunner().run(["composer", "install"], cwd=temp_dir)

        assert exc_info.value.returncode == 2
        assert "composer install" in str(exc_info.value)

    def test_missing_executable(self, temp_dir):
        with patch("laravel_shb.core.runner.subprocess.run", side_effect=FileNotFoundError("nope")):
            with pytest.raises(CommandError, match="Command not found: composer"):
                CommandRunner().run(["composer", "install"], cwd=temp_dir)

    def test_timeout(self, temp_dir):
        error = subprocess.TimeoutExpired(["npm"], 1)
        with patch("laravel_shb.core.runner.subprocess.run", side_effect=error):
            with pytest.raises(CommandError, match="timed out"):
                CommandRunner(timeout=1).run(["npm", "install"], cwd=temp_dir)
