"""Infrastructure: Kubernetes API client construction."""
