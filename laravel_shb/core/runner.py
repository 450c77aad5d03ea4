"""
Command Runner - Runs external tools (composer, npm, php artisan)

Commands inherit the terminal's stdin/stdout/stderr so the user sees real-time
progress and can answer interactive prompts. Stages receive a runner instance
instead of calling subprocess directly, which lets tests substitute a stub.
"""
import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from .errors import CommandError

logger = logging.getLogger(__name__)


class CommandRunner:
    """
    Runs external commands synchronously

    Raises CommandError on nonzero exit, timeout, or a missing executable.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def run(self, command: List[str], cwd: Path) -> None:
        """
        Run a command and wait for it to finish

        Args:
            command: Executable and arguments
            cwd: Working directory for the command

        Raises:
            CommandError: If the command does not exit with status 0
        """
        command_line = " ".join(command)
        logger.info(f"[Runner] $ {command_line}")

        try:
            result = subprocess.run(command, cwd=cwd, timeout=self.timeout)
        except FileNotFoundError as e:
            raise CommandError(command, f"Command not found: {command[0]} ({e})") from e
        except subprocess.TimeoutExpired as e:
            raise CommandError(
                command, f"Command timed out after {self.timeout}s: {command_line}"
            ) from e
        except OSError as e:
            raise CommandError(command, f"Could not run {command_line}: {e}") from e

        if result.returncode != 0:
            raise CommandError(
                command,
                f"Command failed: {command_line} (exit code {result.returncode})",
                returncode=result.returncode,
            )


__all__ = ["CommandRunner"]
