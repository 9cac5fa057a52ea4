"""
Release Engine Errors

Custom exceptions raised while resolving, applying and verifying version bumps.
Every error aborts the current command; nothing is retried.
"""

from pathlib import Path
from typing import Iterable, Optional, Union


class ReleaseError(Exception):
    """
    Base exception for all releaseos errors

    Carries a human readable message plus optional context that is appended
    to the rendered message.
    """

    def __init__(self, message: str, **kwargs):
        """
        Initialize ReleaseError

        Args:
            message: Error message
            **kwargs: Additional error context
        """
        self.message = message
        self.context = {k: v for k, v in kwargs.items() if v is not None}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context"""
        if not self.context:
            return self.message
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"


class FormatError(ReleaseError):
    """Raised for malformed versions, intent metadata or changelog structure"""
    pass


class GraphError(ReleaseError):
    """Raised when the artifact graph cannot be built or navigated"""
    pass


class ConfigurationError(ReleaseError):
    """Raised for invalid configuration values and templates"""
    pass


class IOFailure(ReleaseError):
    """
    Exception raised when reading or writing a file fails

    The offending path is always part of the message.
    """

    def __init__(self, message: str, path: Union[str, Path, None] = None, **kwargs):
        self.path = Path(path) if path is not None else None
        super().__init__(message, path=self.path, **kwargs)


class ProcessFailure(IOFailure):
    """Raised when an external command (git, editor, update script) fails"""

    def __init__(self, message: str, command: Optional[Iterable[str]] = None, **kwargs):
        self.command = list(command) if command is not None else None
        command_str = " ".join(self.command) if self.command else None
        super().__init__(message, command=command_str, **kwargs)


class VerificationFailure(ReleaseError):
    """
    Base exception for verification policy violations

    Attributes:
        artifacts: The artifact ids responsible for the failure, sorted
    """

    def __init__(self, message: str, artifacts: Iterable = (), **kwargs):
        self.artifacts = sorted(artifacts)
        if self.artifacts:
            message = f"{message}: {', '.join(str(a) for a in self.artifacts)}"
        super().__init__(message, **kwargs)


class ArtifactNotInScopeError(VerificationFailure):
    """Raised when an intent document names an artifact outside the scope"""

    def __init__(self, artifacts: Iterable):
        super().__init__(
            "The following artifacts in the Markdown files are not present in the project scope",
            artifacts=artifacts,
        )


class ScopeViolationError(VerificationFailure):
    """Raised when modules required by the verification mode lack an intent"""

    def __init__(self, mode: str, artifacts: Iterable = ()):
        self.mode = mode
        artifacts = list(artifacts)
        if artifacts:
            message = f"Versioning verification failed ({mode}), missing version Markdown for"
        else:
            message = f"Versioning verification failed ({mode}), no version Markdown files found"
        super().__init__(message, artifacts=artifacts)


class InconsistentBumpsError(VerificationFailure):
    """Raised when consistent version bumps are required but differ"""

    def __init__(self, bumps: dict):
        self.bumps = dict(bumps)
        details = ", ".join(f"{artifact}={bump}" for artifact, bump in sorted(self.bumps.items()))
        super().__init__(f"Version bumps are not consistent across all projects: {details}")
        self.artifacts = sorted(self.bumps)
