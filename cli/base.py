"""
Base command wrapper with result parsing and command specs
"""
import re
import shlex
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Error types that can be detected in command output"""
    NONE = "none"
    TIMEOUT = "timeout"
    CONNECTION_ERROR = "connection_error"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    RESOURCE_EXHAUSTED = "resource_exhausted"
    COMMAND_FAILED = "command_failed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CommandSpec:
    """A command name plus its ordered arguments, executed on exactly one node"""
    name: str
    args: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable of args but always store an immutable tuple
        object.__setattr__(self, "args", tuple(str(arg) for arg in self.args))

    def argv(self) -> List[str]:
        """Return the full argument vector"""
        return [self.name, *self.args]

    def render(self) -> str:
        """Render a shell-safe command line"""
        return shlex.join(self.argv())

    def __str__(self) -> str:
        return self.render()


@dataclass
class CommandResult:
    """Structured result from command execution"""
    success: bool
    output: Optional[str]
    error_type: ErrorType
    error_message: Optional[str]
    exit_code: Optional[int]

    def __bool__(self):
        """Allow truthiness check: True when command succeeded."""
        return self.success

    @property
    def failed(self) -> bool:
        """Convenience property: True when command failed."""
        return not self.success

    @property
    def lines(self) -> List[str]:
        """Combined stdout/stderr split into ordered lines"""
        if not self.output:
            return []
        return [line.rstrip("\r") for line in self.output.splitlines()]


class CommandWrapper:  # pylint: disable=too-few-public-methods
    """Base wrapper for CLI commands - generates command specs and parses results"""
    # Error patterns: (pattern, error_type, description)
    ERROR_PATTERNS = [
        (r"timeout|timed out|time out", ErrorType.TIMEOUT, "Command timed out"),
        (
            r"connection (?:refused|reset|closed|failed)|unable to connect|cannot connect|connection error",
            ErrorType.CONNECTION_ERROR,
            "Connection error",
        ),
        (
            r"permission denied|access denied|operation not permitted|eacces|read-only file system",
            ErrorType.PERMISSION_DENIED,
            "Permission denied",
        ),
        (
            r"no space left|disk full|out of memory|resource.*unavailable",
            ErrorType.RESOURCE_EXHAUSTED,
            "Resource exhausted",
        ),
        (
            r"not found|no such file|no such directory|does not exist",
            ErrorType.NOT_FOUND,
            "Resource not found",
        ),
        (
            r"invalid (?:argument|option|parameter|input)|bad argument|unknown (?:flag|option)",
            ErrorType.INVALID_ARGUMENT,
            "Invalid argument",
        ),
    ]

    @classmethod
    def parse_result(cls, output: Optional[str], exit_code: Optional[int] = None) -> CommandResult:
        """
        Parse command output and return structured result
        Success is decided by the exit status alone; the output is only
        inspected to classify a failure for diagnostics.
        Args:
            output: Command output (stdout/stderr combined)
            exit_code: Exit code, None if the command never reported one
        Returns:
            CommandResult object
        """
        success = exit_code == 0
        error_type, error_msg = (ErrorType.NONE, None) if success else cls._parse_error(output, exit_code)
        return CommandResult(
            success=success,
            output=output,
            error_type=error_type,
            error_message=error_msg,
            exit_code=exit_code,
        )

    @staticmethod
    def contains_token(output: Optional[str], token: str) -> bool:
        """Helper to check whether output contains a keyword."""
        if not output:
            return False
        return token.lower() in output.lower()

    @classmethod
    def _parse_error(cls, output: Optional[str], exit_code: Optional[int]) -> Tuple[ErrorType, Optional[str]]:
        """
        Identify error type and message for a failed command
        Args:
            output: Command output (stdout/stderr combined)
            exit_code: Exit code if available
        Returns:
            Tuple of (ErrorType, error_message)
        """
        if exit_code is None:
            # The transport never got an exit status: launch failure or timeout
            if not output:
                return ErrorType.TIMEOUT, "Command produced no exit status (possible timeout)"
            return ErrorType.UNKNOWN, cls._tail(output)
        if output:
            for pattern, error_type, description in cls.ERROR_PATTERNS:
                if re.search(pattern, output, re.IGNORECASE):
                    return error_type, cls._extract_error_message(output, pattern) or description
        return ErrorType.COMMAND_FAILED, f"Command failed with exit code {exit_code}"

    @classmethod
    def _extract_error_message(cls, output: str, pattern: str) -> Optional[str]:
        """Return the first output line matching pattern, truncated"""
        for line in output.splitlines():
            if re.search(pattern, line, re.IGNORECASE):
                msg = line.strip()
                if len(msg) > 200:
                    msg = msg[:197] + "..."
                return msg
        return None

    @staticmethod
    def _tail(output: str) -> Optional[str]:
        stripped = output.strip()
        if len(stripped) > 200:
            return "..." + stripped[-197:]
        return stripped or None
