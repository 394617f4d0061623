"""Resource references and label assignments.

Two ephemeral values built from the command line and consumed once by
the label patcher:

- ``ResourceRef``: ``(job|pod)/<name>`` plus the target namespace.
- ``LabelAssignment``: a literal ``key=value`` pair.

Label-key syntax is validated by the API server, not here. The empty
label value is valid.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from k8s_psl.domain.types import ResourceKind

RESOURCE_SEPARATOR = "/"
LABEL_SEPARATOR = "="


class ResourceRef(BaseModel):
    """A namespaced Job or Pod."""

    model_config = {"frozen": True}

    kind: ResourceKind
    namespace: str
    name: str

    @field_validator("namespace", "name")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    def __str__(self) -> str:
        return f"{self.kind}/{self.name}"


class LabelAssignment(BaseModel):
    """A single ``labels[key] = value`` update."""

    model_config = {"frozen": True}

    key: str
    value: str = ""

    @field_validator("key")
    @classmethod
    def _key_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("label key must not be empty")
        return value

    def as_labels(self) -> dict[str, str]:
        return {self.key: self.value}

    def __str__(self) -> str:
        return f"{self.key}{LABEL_SEPARATOR}{self.value}"


def parse_resource(raw: str) -> tuple[ResourceKind, str]:
    """Split ``kind/name`` into a supported kind and a non-empty name.

    Everything after the first ``/`` is the name.

    Raises:
        ValueError: unsupported or missing kind, or empty name.
    """
    kind_part, sep, name = raw.partition(RESOURCE_SEPARATOR)
    try:
        kind = ResourceKind(kind_part)
    except ValueError:
        supported = ", ".join(k.value for k in ResourceKind)
        msg = f"invalid or missing resource kind {kind_part!r} (expected one of: {supported})"
        raise ValueError(msg) from None
    if not sep or not name:
        msg = f"missing resource name in {raw!r} (expected {kind}/<name>)"
        raise ValueError(msg)
    return kind, name


def parse_label(raw: str) -> LabelAssignment:
    """Parse ``key=value``, splitting on the first ``=``.

    Raises:
        ValueError: no ``=`` present, or empty key.
    """
    key, sep, value = raw.partition(LABEL_SEPARATOR)
    if not sep:
        msg = f"invalid label {raw!r} (expected <key>=<value>)"
        raise ValueError(msg)
    if not key:
        msg = f"invalid label {raw!r} (label key must not be empty)"
        raise ValueError(msg)
    return LabelAssignment(key=key, value=value)


def build_ref(kind: ResourceKind, name: str, namespace: str) -> ResourceRef:
    """Bind a parsed ``kind/name`` to its namespace.

    Raises:
        ValueError: empty namespace.
    """
    if not namespace:
        raise ValueError("namespace must not be empty")
    return ResourceRef(kind=kind, namespace=namespace, name=name)
