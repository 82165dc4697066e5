"""kubedeploy - Kubernetes deployment driver for the Bingo gRPC service"""

__version__ = "1.0.0"
