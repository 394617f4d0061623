"""Resource kinds and error kinds.

ErrorKind is the discriminator carried by every failed ServiceResult.
The exit translator pattern-matches on it, never on message text.
"""

from __future__ import annotations

from enum import StrEnum


class ResourceKind(StrEnum):
    """Kubernetes resource kinds that can be labeled."""

    JOB = "job"
    POD = "pod"


class ErrorKind(StrEnum):
    """Failure classes of a single invocation."""

    COMMAND_FAILED = "command_failed"
    LAUNCH_FAILED = "launch_failed"
    RESOURCE_ERROR = "resource_error"
    API_UNREACHABLE = "api_unreachable"
