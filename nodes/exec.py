"""
Run commands on nodes and turn failures into exceptions
"""
from typing import TYPE_CHECKING, List, Optional
from cli.base import CommandResult, CommandSpec, CommandWrapper, ErrorType
from libs.logger import get_logger
if TYPE_CHECKING:
    from .base import Node
logger = get_logger(__name__)


class CommandFailed(RuntimeError):
    """Raised when a command exits non-zero or cannot be launched on a node."""

    def __init__(self, node_name: str, spec: CommandSpec, result: CommandResult):
        self.node_name = node_name
        self.spec = spec
        self.result = result
        if result.exit_code is None:
            detail = f"command \"{spec}\" could not be run on node {node_name}"
        else:
            detail = f"command \"{spec}\" failed on node {node_name} with exit code {result.exit_code}"
        if result.error_message:
            detail = f"{detail}: {result.error_message}"
        super().__init__(detail)

    @property
    def lines(self) -> List[str]:
        """Combined output captured before the failure"""
        return self.result.lines

    @property
    def exit_code(self) -> Optional[int]:
        return self.result.exit_code

    @property
    def error_type(self) -> ErrorType:
        return self.result.error_type


def run_command(node: "Node", spec: CommandSpec, timeout: Optional[int] = None) -> CommandResult:
    """
    Run spec once on node and capture its combined output
    Args:
        node: Target node
        spec: Command to run
        timeout: Command timeout in seconds (backend default if None)
    Returns:
        CommandResult of a successful run
    Raises:
        CommandFailed: non-zero exit, or the command could not be launched
    """
    logger.debug("Running on node %s: %s", node.name, spec)
    try:
        output, exit_code = node.exec(spec.render(), timeout=timeout)
    except OSError as exc:
        result = CommandResult(
            success=False,
            output=None,
            error_type=ErrorType.CONNECTION_ERROR,
            error_message=str(exc),
            exit_code=None,
        )
        raise CommandFailed(node.name, spec, result) from exc
    result = CommandWrapper.parse_result(output, exit_code)
    if result.failed:
        raise CommandFailed(node.name, spec, result)
    return result
