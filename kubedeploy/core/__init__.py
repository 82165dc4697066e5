"""
kubedeploy Core

Deployment stages. Each stage takes the immutable DeploymentContext,
the clients it needs and the logger.
"""

from .prerequisites import PrerequisiteChecker
from .image_builder import ImageBuildStage
from .apply_engine import ApplyEngine
from .convergence import ConvergenceWaiter
from .verifier import Verifier
from .reporter import Reporter
from .teardown import TeardownEngine

__all__ = [
    "PrerequisiteChecker",
    "ImageBuildStage",
    "ApplyEngine",
    "ConvergenceWaiter",
    "Verifier",
    "Reporter",
    "TeardownEngine",
]
