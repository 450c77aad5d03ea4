"""
Build errors

Every fatal failure raised by a stage derives from BuildError so the
orchestrator can stop the run with a single descriptive message.
"""


class BuildError(Exception):
    """Raised when a build stage fails"""
    pass


class PreconditionError(BuildError):
    """Raised when a required input is missing"""
    pass


class CommandError(BuildError):
    """Raised when an external command fails, times out or cannot be started"""

    def __init__(self, command, message: str, returncode=None):
        self.command = list(command)
        self.returncode = returncode
        super().__init__(message)


class InstallError(BuildError):
    """Raised when dependency manifests cannot be read"""
    pass


class StagingError(BuildError):
    """Raised when copying files into the output root fails"""
    pass


class ArchiveError(BuildError):
    """Raised when the deploy archive cannot be written"""
    pass


__all__ = [
    "BuildError",
    "PreconditionError",
    "CommandError",
    "InstallError",
    "StagingError",
    "ArchiveError",
]
