"""
kubedeploy Services Layer

Clients for the external systems the driver talks to.
"""

from .kubectl_service import KubectlService
from .docker_service import DockerService
from .health_probe import HealthProbe

__all__ = [
    "KubectlService",
    "DockerService",
    "HealthProbe",
]
