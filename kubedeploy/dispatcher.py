"""Maps an operation token to the command that runs it."""

from typing import Dict, Optional, Type

from kubedeploy.base import BaseCommand
from kubedeploy.commands import CleanupCommand, DeployCommand, InfoCommand, VerifyCommand
from kubedeploy.constants import DEFAULT_OPERATION, OPERATION_ALIASES
from kubedeploy.exceptions import UsageError
from kubedeploy.models.context import DeploymentContext

COMMANDS: Dict[str, Type[BaseCommand]] = {
    "deploy": DeployCommand,
    "cleanup": CleanupCommand,
    "verify": VerifyCommand,
    "info": InfoCommand,
}


def resolve_operation(token: Optional[str]) -> str:
    """
    Resolve an operation token (or its alias) to an operation name.

    Args:
        token: Token from the command line, None for the default

    Returns:
        Canonical operation name

    Raises:
        UsageError: Unknown operation
    """
    if token is None or token == "":
        return DEFAULT_OPERATION

    operation = OPERATION_ALIASES.get(token, token)
    if operation not in COMMANDS:
        raise UsageError(token)
    return operation


def create_command(operation: str, context: DeploymentContext, **kwargs) -> BaseCommand:
    return COMMANDS[resolve_operation(operation)](context, **kwargs)


def dispatch(operation: Optional[str], context: DeploymentContext, **kwargs) -> BaseCommand:
    """
    Run one operation end to end.

    Keyword arguments are passed through to the command (verbose,
    json_output, console and injected clients).

    Raises:
        UsageError: Unknown operation, before anything is executed
        SystemExit: Non-zero when the operation fails
    """
    command = create_command(resolve_operation(operation), context, **kwargs)
    command.run()
    return command
