"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``k8s-psl.toml`` only contains
overrides. Most invocations need no config file at all.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class KubeConfigMode(StrEnum):
    """How cluster connection settings are discovered."""

    AUTO = "auto"
    IN_CLUSTER = "in-cluster"
    KUBECONFIG = "kubeconfig"


class KubeConfig(BaseModel):
    """[kube] section."""

    model_config = {"frozen": True}

    mode: KubeConfigMode = KubeConfigMode.AUTO
    kubeconfig: str | None = None
    context: str | None = None
    field_manager: str = "k8s-psl"
    # Seconds; None leaves timeouts to the HTTP client.
    request_timeout: float | None = Field(default=None, gt=0)
