"""kubedeploy operations"""

from .deploy import DeployCommand
from .cleanup import CleanupCommand
from .verify import VerifyCommand
from .info import InfoCommand

__all__ = [
    "DeployCommand",
    "CleanupCommand",
    "VerifyCommand",
    "InfoCommand",
]
