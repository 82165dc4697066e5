"""
kubedeploy Constants

Centralized constants for magic values, defaults, and configuration.
"""

# Default Deployment Configuration
DEFAULT_NAMESPACE = "bingo"
DEFAULT_IMAGE_TAG = "latest"
DEFAULT_APP_NAME = "bingo-grpc"
DEFAULT_SERVICE_NAME = "bingo-grpc-service"
DEFAULT_MANIFEST_DIR = "k8s"
DEFAULT_HEALTH_CHECK_SCRIPT = "scripts/verify-deployment.sh"

# Tool Binaries
DEFAULT_KUBECTL = "kubectl"
DEFAULT_DOCKER = "docker"

# Timeouts (seconds)
DEFAULT_WAIT_TIMEOUT = 300
DEFAULT_HEALTH_CHECK_TIMEOUT = 60

# Diagnostics
DEFAULT_EVENTS_LIMIT = 10

# Service Ports
DEFAULT_GRPC_PORT = 50051

# Log Configuration
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

# Manifest units in apply order: (name, apply_order, kind).
# Teardown order is always derived by reversing this table.
RESOURCE_TABLE = [
    ("namespace", 1, "Namespace"),
    ("rbac", 2, "ServiceAccount/Role/RoleBinding"),
    ("secrets", 3, "Secret"),
    ("configmap", 4, "ConfigMap"),
    ("deployment", 5, "Deployment"),
    ("service", 6, "Service"),
    ("hpa", 7, "HorizontalPodAutoscaler"),
    ("ingress", 8, "Ingress"),
    ("servicemonitor", 9, "ServiceMonitor"),
]

MANIFEST_SUFFIX = ".yaml"

# Resource kinds listed by the info report: (title, kubectl kind)
REPORT_SECTIONS = [
    ("Pods", "pods"),
    ("Services", "services"),
    ("Ingress", "ingress"),
    ("HPA", "hpa"),
]

# Operations
OPERATION_ALIASES = {"clean": "cleanup"}
DEFAULT_OPERATION = "deploy"

# Environment Variables (name, description)
ENVIRONMENT_VARIABLES = [
    ("NAMESPACE", f"Kubernetes namespace (default: {DEFAULT_NAMESPACE})"),
    ("KUBE_CONTEXT", "Kubernetes context to use"),
    ("DRY_RUN", "Run in dry-run mode (default: false)"),
    ("SKIP_BUILD", "Skip Docker build step (default: false)"),
    ("IMAGE_TAG", f"Docker image tag (default: {DEFAULT_IMAGE_TAG})"),
    ("REGISTRY", "Docker registry to push to"),
    ("MANIFEST_DIR", f"Directory holding manifests (default: {DEFAULT_MANIFEST_DIR})"),
    ("WAIT_TIMEOUT", f"Seconds to wait for readiness (default: {DEFAULT_WAIT_TIMEOUT})"),
    ("HEALTH_CHECK_SCRIPT", f"Health probe script (default: {DEFAULT_HEALTH_CHECK_SCRIPT})"),
    ("STRICT_VERIFY", "Fail verification when the health probe fails (default: false)"),
]

# Truthy values accepted for boolean environment variables
TRUTHY_VALUES = ["1", "true", "yes", "on"]

# Client-side kubectl messages that mean the API server was never reached
UNREACHABLE_MARKERS = [
    "unable to connect to the server",
    "the connection to the server",
    "no configuration has been provided",
    "the server has asked for the client to provide credentials",
]

# Prefix of errors returned by a live API server
SERVER_ERROR_PREFIX = "error from server"

# Outcome detail for an ignore-absent delete that found nothing
ALREADY_ABSENT = "already absent"
