"""LabelPatcher — set one label on a Job or Pod with a single merge-patch.

Failure classification:
- The server answered but refused (404 not found, 409 conflict, 422
  invalid label, any other status): ``ErrorKind.RESOURCE_ERROR``.
- The server could not be reached or would not accept our credentials
  (config loading, network, TLS, 401, 403): ``ErrorKind.API_UNREACHABLE``.
  The client reports TLS failures as an ApiException with status 0.

No retry, no backoff, no polling.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

import urllib3
import yaml
from kubernetes import client
from kubernetes.client.exceptions import ApiException
from kubernetes.config import ConfigException

from k8s_psl.config.models import KubeConfig
from k8s_psl.domain.refs import LabelAssignment, ResourceRef
from k8s_psl.domain.types import ErrorKind, ResourceKind
from k8s_psl.infrastructure.kube import load_api_client
from k8s_psl.services.result import ServiceError, ServiceResult
from k8s_psl.services.timing import timed_step

logger = logging.getLogger(__name__)

MERGE_PATCH_CONTENT_TYPE = "application/merge-patch+json"

# Authentication and authorization failures: the request never got as far
# as the resource itself.
AUTH_FAILURE_STATUSES = frozenset({401, 403})


def _patch_job(api_client: client.ApiClient, ref: ResourceRef, body: dict, **kwargs: Any) -> Any:
    return client.BatchV1Api(api_client).patch_namespaced_job(
        ref.name, ref.namespace, body, **kwargs
    )


def _patch_pod(api_client: client.ApiClient, ref: ResourceRef, body: dict, **kwargs: Any) -> Any:
    return client.CoreV1Api(api_client).patch_namespaced_pod(
        ref.name, ref.namespace, body, **kwargs
    )


_PATCHERS: dict[ResourceKind, Callable[..., Any]] = {
    ResourceKind.JOB: _patch_job,
    ResourceKind.POD: _patch_pod,
}


def label_patch_body(label: LabelAssignment) -> dict[str, Any]:
    """Merge-patch body that touches nothing but ``metadata.labels[key]``."""
    return {"metadata": {"labels": label.as_labels()}}


def _api_message(exc: ApiException) -> str:
    """Best-effort extraction of the Status message from an API error body."""
    if exc.body:
        try:
            status = json.loads(exc.body)
        except (TypeError, ValueError):
            return str(exc.reason or "")
        if isinstance(status, dict) and status.get("message"):
            return str(status["message"])
    return str(exc.reason or "")


class LabelPatcher:
    """Apply a LabelAssignment to a ResourceRef.

    Args:
        kube: Connection and patch settings.
        client_factory: Builds the ApiClient; called once per patch.
            Defaults to loading ambient cluster configuration.
    """

    def __init__(
        self,
        kube: KubeConfig | None = None,
        client_factory: Callable[[KubeConfig], client.ApiClient] | None = None,
    ) -> None:
        self._kube = kube or KubeConfig()
        self._client_factory = client_factory

    @timed_step
    def patch(self, ref: ResourceRef, label: LabelAssignment) -> ServiceResult:
        op = "patch_label"
        data: dict[str, Any] = {
            "kind": str(ref.kind),
            "namespace": ref.namespace,
            "name": ref.name,
            "label": {label.key: label.value},
        }

        try:
            factory = self._client_factory or load_api_client
            api_client = factory(self._kube)
        except (ConfigException, OSError, yaml.YAMLError) as exc:
            logger.debug("Cluster configuration unavailable: %s", exc)
            return self._failure(
                op,
                data,
                ErrorKind.API_UNREACHABLE,
                f"Cannot load cluster configuration: {exc}",
            )

        kwargs: dict[str, Any] = {
            "field_manager": self._kube.field_manager,
            "_content_type": MERGE_PATCH_CONTENT_TYPE,
        }
        if self._kube.request_timeout is not None:
            kwargs["_request_timeout"] = self._kube.request_timeout

        logger.debug("Patching %s in namespace %s with %s", ref, ref.namespace, label)
        try:
            with api_client:
                _PATCHERS[ref.kind](api_client, ref, label_patch_body(label), **kwargs)
        except ApiException as exc:
            status = exc.status
            detail = {"status": status, "reason": exc.reason}
            message = _api_message(exc)
            if not status:
                # TLS failures arrive wrapped by the client as status 0.
                logger.debug("API request failed before a response: %s", exc.reason)
                return self._failure(
                    op,
                    data,
                    ErrorKind.API_UNREACHABLE,
                    f"Cannot reach API server: {str(exc.reason or exc).strip()}",
                    detail,
                )
            if status in AUTH_FAILURE_STATUSES:
                return self._failure(
                    op,
                    data,
                    ErrorKind.API_UNREACHABLE,
                    f"API server refused credentials ({status}): {message}",
                    detail,
                )
            if status == 404:
                text = f"{ref} not found in namespace {ref.namespace}"
            else:
                text = f"API server rejected patch of {ref} ({status}): {message}"
            return self._failure(op, data, ErrorKind.RESOURCE_ERROR, text, detail)
        except (urllib3.exceptions.HTTPError, OSError) as exc:
            logger.debug("API request failed: %s", exc)
            return self._failure(
                op,
                data,
                ErrorKind.API_UNREACHABLE,
                f"Cannot reach API server: {exc}",
            )

        return ServiceResult(ok=True, op=op, data=data)

    @staticmethod
    def _failure(
        op: str,
        data: dict[str, Any],
        kind: ErrorKind,
        message: str,
        detail: dict[str, Any] | None = None,
    ) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            data=data,
            error=ServiceError(code=kind, message=message, detail=detail or {}),
        )
