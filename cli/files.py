"""
File transfer command wrappers with fluent API
"""
import posixpath
import shlex
from .base import CommandSpec, CommandWrapper


class FileOps(CommandWrapper):
    """Wrapper for file operations that move bytes over the command channel"""
    def __init__(self):
        """Initialize with default settings"""
        self._parents: bool = True

    def parents(self, value: bool = True) -> "FileOps":
        """Create missing parent directories on write (returns self for chaining)."""
        self._parents = value
        return self

    def read_base64(self, path: str) -> CommandSpec:
        """Generate command printing a file as a single base64 line"""
        return CommandSpec("base64", ["-w0", path])

    def write_base64(self, path: str, encoded: str, mode: str = "0644") -> CommandSpec:
        """Generate command writing base64 content to path with the given mode"""
        quoted = shlex.quote(path)
        steps = []
        if self._parents:
            steps.append(f"mkdir -p {shlex.quote(posixpath.dirname(path) or '/')}")
        # Truncate and restrict the file before any content lands in it
        steps.append(f": > {quoted}")
        steps.append(f"chmod {mode} {quoted}")
        steps.append(f"printf '%s' {shlex.quote(encoded)} | base64 -d > {quoted}")
        return CommandSpec("sh", ["-c", " && ".join(steps)])
