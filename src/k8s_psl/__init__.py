"""k8s-psl — run a command, then label a Kubernetes Job or Pod on success."""

__version__ = "0.1.0"
