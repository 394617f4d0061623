"""Kubernetes API client construction.

Connection settings come from ambient configuration: the in-cluster
service account when running inside a pod, a kubeconfig file otherwise.
Loading is deferred until a label actually needs to be patched.

INVARIANT: the client never retries. One request, one outcome.
"""

from __future__ import annotations

import logging
import os

from kubernetes import client, config

from k8s_psl.config.models import KubeConfig, KubeConfigMode

logger = logging.getLogger(__name__)

IN_CLUSTER_ENV_VAR = "KUBERNETES_SERVICE_HOST"


def _resolve_mode(mode: KubeConfigMode) -> KubeConfigMode:
    if mode is not KubeConfigMode.AUTO:
        return mode
    if os.environ.get(IN_CLUSTER_ENV_VAR):
        return KubeConfigMode.IN_CLUSTER
    return KubeConfigMode.KUBECONFIG


def load_api_client(kube: KubeConfig) -> client.ApiClient:
    """Build an ApiClient from ambient cluster configuration.

    Raises:
        kubernetes.config.ConfigException: no usable configuration found.
    """
    configuration = client.Configuration()
    mode = _resolve_mode(kube.mode)
    if mode is KubeConfigMode.IN_CLUSTER:
        logger.debug("Loading in-cluster configuration")
        config.load_incluster_config(client_configuration=configuration)
    else:
        logger.debug("Loading kubeconfig (file=%s, context=%s)", kube.kubeconfig, kube.context)
        config.load_kube_config(
            config_file=kube.kubeconfig,
            context=kube.context,
            client_configuration=configuration,
            persist_config=False,
        )
    configuration.retries = False
    return client.ApiClient(configuration)
