"""Tests for ApiClient construction from ambient configuration."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from kubernetes import client

from k8s_psl.config.models import KubeConfig, KubeConfigMode
from k8s_psl.infrastructure.kube import IN_CLUSTER_ENV_VAR, load_api_client


@pytest.fixture
def loaders():
    with (
        patch("kubernetes.config.load_incluster_config") as incluster,
        patch("kubernetes.config.load_kube_config") as kubeconfig,
    ):
        yield incluster, kubeconfig


class TestLoadApiClient:
    def test_auto_outside_cluster_uses_kubeconfig(
        self, loaders, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv(IN_CLUSTER_ENV_VAR, raising=False)
        incluster, kubeconfig = loaders
        api_client = load_api_client(KubeConfig(context="prod", kubeconfig="/tmp/kc"))
        incluster.assert_not_called()
        kwargs = kubeconfig.call_args.kwargs
        assert kwargs["config_file"] == "/tmp/kc"
        assert kwargs["context"] == "prod"
        assert kwargs["persist_config"] is False
        assert isinstance(api_client, client.ApiClient)

    def test_auto_inside_cluster(self, loaders, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(IN_CLUSTER_ENV_VAR, "10.0.0.1")
        incluster, kubeconfig = loaders
        load_api_client(KubeConfig())
        incluster.assert_called_once()
        kubeconfig.assert_not_called()

    def test_explicit_mode_wins(self, loaders, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(IN_CLUSTER_ENV_VAR, "10.0.0.1")
        incluster, kubeconfig = loaders
        load_api_client(KubeConfig(mode=KubeConfigMode.KUBECONFIG))
        incluster.assert_not_called()
        kubeconfig.assert_called_once()

    def test_retries_disabled(self, loaders) -> None:
        api_client = load_api_client(KubeConfig(mode=KubeConfigMode.IN_CLUSTER))
        assert api_client.configuration.retries is False

    def test_loader_errors_propagate(self, loaders) -> None:
        from kubernetes.config import ConfigException

        incluster, _ = loaders
        incluster.side_effect = ConfigException("Service host/port is not set.")
        with pytest.raises(ConfigException):
            load_api_client(KubeConfig(mode=KubeConfigMode.IN_CLUSTER))
