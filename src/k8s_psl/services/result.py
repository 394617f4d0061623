"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer operations return ServiceResult.
A failed result always carries a ServiceError whose ``code`` is an
ErrorKind, so the exit translator can match on it deterministically.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from k8s_psl.domain.types import ErrorKind


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: ErrorKind
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"run_command"``, ``"patch_label"``).
        data: Operation-specific payload.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (step duration).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def error_kind(self) -> ErrorKind | None:
        return self.error.code if self.error else None
