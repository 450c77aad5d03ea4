"""
Tests for the command line interface
"""
import pytest

from laravel_shb.cli import config_from_args, create_parser, main
from laravel_shb.config import SETTING_DEFAULTS, load_settings
from laravel_shb.schemas import EntryTemplate, StalePolicy
from tests.conftest import write


class TestParser:
    """Test argument parsing"""

    def test_build_defaults(self):
        args = create_parser().parse_args(["build"])
        config = config_from_args(args)

        assert config.clean is False
        assert config.install_dependencies is False
        assert config.create_archive is False

    def test_build_flags(self):
        args = create_parser().parse_args([
            "build", "-c", "--install-deps", "--clear-cache", "--zip",
            "--entry-template", "application", "--stale-policy", "mirror",
            "--timeout", "30", "--workers", "2",
        ])
        config = config_from_args(args)

        assert config.clean is True
        assert config.install_dependencies is True
        assert config.clear_cache is True
        assert config.create_archive is True
        assert config.entry_template == EntryTemplate.APPLICATION
        assert config.stale_policy == StalePolicy.MIRROR
        assert config.command_timeout == 30
        assert config.max_workers == 2

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_invalid_workers_rejected(self, minimal_project):
        with pytest.raises(SystemExit) as exc_info:
            main(["build", "--workers", "0", "--project-root", str(minimal_project)])
        assert exc_info.value.code == 2


class TestMain:
    """Test exit codes"""

    def test_success_exit_code(self, minimal_project):
        assert main(["build", "--project-root", str(minimal_project)]) == 0
        assert (minimal_project / "dist" / "index.php").exists()

    def test_failure_exit_code(self, temp_dir, capsys):
        code = main(["build", "--project-root", str(temp_dir)])

        assert code == 1
        assert "Build failed: public folder not found" in capsys.readouterr().err
        assert not (temp_dir / "dist").exists()

    def test_zip_flag(self, minimal_project):
        assert main(["build", "--zip", "--project-root", str(minimal_project)]) == 0
        assert (minimal_project / "deploy.zip").exists()


@pytest.fixture
def clean_environ(monkeypatch):
    for key in SETTING_DEFAULTS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestSettings:
    """Test SHB_* settings resolution"""

    def test_defaults(self, temp_dir, clean_environ):
        assert load_settings(temp_dir) == SETTING_DEFAULTS

    def test_env_file_in_project_root(self, temp_dir, clean_environ):
        write(temp_dir / ".shb.env", "SHB_OUTPUT_DIR=public_html\nSHB_MAX_WORKERS=2\n")

        settings = load_settings(temp_dir)

        assert settings["SHB_OUTPUT_DIR"] == "public_html"
        assert settings["SHB_MAX_WORKERS"] == "2"
        assert settings["SHB_ARCHIVE_NAME"] == "deploy"

    def test_environment_beats_env_file(self, temp_dir, clean_environ):
        write(temp_dir / ".shb.env", "SHB_ARCHIVE_NAME=from-file\n")
        clean_environ.setenv("SHB_ARCHIVE_NAME", "from-env")

        assert load_settings(temp_dir)["SHB_ARCHIVE_NAME"] == "from-env"

    def test_malformed_number_is_left_as_text(self, temp_dir, clean_environ):
        clean_environ.setenv("SHB_MAX_WORKERS", "lots")
        clean_environ.setenv("SHB_COMMAND_TIMEOUT", "soon")

        settings = load_settings(temp_dir)

        assert settings["SHB_MAX_WORKERS"] == "lots"
        assert settings["SHB_COMMAND_TIMEOUT"] == "soon"


class TestMainSettings:
    """Test that main() picks up settings for the project being built"""

    def test_env_file_read_from_project_root(self, minimal_project, temp_dir, clean_environ):
        write(minimal_project / ".shb.env", "SHB_OUTPUT_DIR=public_html\n")
        elsewhere = temp_dir / "elsewhere"
        elsewhere.mkdir()
        clean_environ.chdir(elsewhere)

        assert main(["build", "--project-root", str(minimal_project)]) == 0

        assert (minimal_project / "public_html" / "index.php").exists()
        assert not (minimal_project / "dist").exists()

    def test_malformed_worker_count_is_a_usage_error(self, minimal_project, clean_environ, capsys):
        clean_environ.setenv("SHB_MAX_WORKERS", "lots")

        with pytest.raises(SystemExit) as exc_info:
            main(["build", "--project-root", str(minimal_project)])

        assert exc_info.value.code == 2
        assert "max_workers" in capsys.readouterr().err
        assert not (minimal_project / "dist").exists()

    def test_malformed_timeout_in_env_file(self, minimal_project, clean_environ):
        write(minimal_project / ".shb.env", "SHB_COMMAND_TIMEOUT=ten\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["build", "--project-root", str(minimal_project)])

        assert exc_info.value.code == 2
