"""Click plumbing for the k8s-psl command: command class and app context."""
