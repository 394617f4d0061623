"""Shared pytest fixtures and test helpers for k8s-psl tests."""

from __future__ import annotations

import sys
from collections.abc import Generator
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

PSL_ENV_VARS = (
    "K8S_PSL_NAMESPACE",
    "K8S_PSL_LABEL",
    "K8S_PSL_CONFIG",
    "K8S_PSL_VERBOSE",
    "K8S_PSL_LOG_JSON",
    "K8S_PSL_JSON_OUTPUT",
    "K8S_PSL_KUBE__MODE",
    "K8S_PSL_KUBE__CONTEXT",
    "K8S_PSL_KUBE__KUBECONFIG",
    "K8S_PSL_KUBE__FIELD_MANAGER",
    "K8S_PSL_KUBE__REQUEST_TIMEOUT",
)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test in an empty directory with no K8S_PSL_* variables set."""
    for name in PSL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def kube_api() -> Generator[SimpleNamespace]:
    """Fake cluster: no config loading, mocked BatchV1Api and CoreV1Api.

    Attributes:
        factory: the patched ``load_api_client``.
        api_client: the ApiClient it returns.
        batch: the BatchV1Api instance (``patch_namespaced_job``).
        core: the CoreV1Api instance (``patch_namespaced_pod``).
    """
    api_client = MagicMock(name="ApiClient")
    with (
        patch("k8s_psl.services.patcher.load_api_client", return_value=api_client) as factory,
        patch("kubernetes.client.BatchV1Api") as batch_cls,
        patch("kubernetes.client.CoreV1Api") as core_cls,
    ):
        yield SimpleNamespace(
            factory=factory,
            api_client=api_client,
            batch=batch_cls.return_value,
            core=core_cls.return_value,
        )


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def py_command(code: str) -> list[str]:
    """A portable command vector running *code* in a fresh interpreter."""
    return [sys.executable, "-c", code]


def exit_with(status: int) -> list[str]:
    return py_command(f"import sys; sys.exit({status})")
