"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los descriptores se validan antes de enviar nada; un path mal formado falla
  en la definición del escenario, no a mitad de la ejecución.
- Los resultados (outcomes) tienen una forma única para el runner, los
  escenarios y la capa de presentación.

Nota:
- Estos modelos describen *qué* se envía y *qué* se observó, no *cómo*.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})


class OutcomeKind(str, Enum):
    """How a single probe request ended."""

    OK = "ok"
    HTTP_ERROR = "http_error"
    TRANSPORT_ERROR = "transport_error"


class FindingSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class RequestDescriptor(BaseModel):
    """One HTTP request to issue during a debug run.

    Descriptors are declared once, in order, and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    label: str = Field(
        ...,
        min_length=1,
        description="Human readable name shown in the transcript.",
    )
    method: str = Field(
        default="GET",
        description="HTTP method (normalised to upper case).",
    )
    path: str = Field(
        ...,
        min_length=1,
        description="Path (and optional query) appended to the base URL.",
    )
    body: Any = Field(
        default=None,
        description="JSON-serializable payload; None means no body.",
    )

    @field_validator("method")
    @classmethod
    def _normalise_method(cls, value: str) -> str:
        method = value.strip().upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"unsupported HTTP method: {value!r}")
        return method

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("path must start with '/'")
        return value

    @property
    def has_body(self) -> bool:
        return self.body is not None


class ProbeOutcome(BaseModel):
    """What happened when a descriptor was executed."""

    label: str
    method: str
    url: str
    kind: OutcomeKind
    status_code: int | None = None
    reason: str = ""
    elapsed_ms: float = Field(default=0.0, ge=0)
    headers: dict[str, str] = Field(default_factory=dict)
    json_body: Any = None
    text_body: str | None = None
    error: str | None = Field(
        default=None,
        description="Transport failure message (only for TRANSPORT_ERROR).",
    )

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.OK

    @property
    def is_json(self) -> bool:
        return self.text_body is None and self.kind is not OutcomeKind.TRANSPORT_ERROR

    def envelope(self) -> dict[str, Any]:
        """JSON body as a dict, or {} when the body is not a JSON object."""

        if self.is_json and isinstance(self.json_body, dict):
            return self.json_body
        return {}

    def preview(self, limit: int = 200) -> str:
        text = self.text_body or ""
        if len(text) <= limit:
            return text
        return text[:limit] + "..."


class Source(BaseModel):
    """A video/content provider record managed by the sources API."""

    model_config = ConfigDict(extra="ignore")

    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    enabled: bool = False
    is_default: bool = False


class SourceType(BaseModel):
    """Category entry returned by `/api/sources_manage/types`."""

    model_config = ConfigDict(extra="ignore")

    type_id: int | str
    type_name: str


class Finding(BaseModel):
    """An observation a scenario adds to the transcript."""

    step: str
    message: str
    severity: FindingSeverity = FindingSeverity.INFO


class ScenarioReport(BaseModel):
    """Everything a scenario run produced, in execution order."""

    name: str
    outcomes: list[ProbeOutcome] = Field(default_factory=list)
    findings: list[Finding] = Field(default_factory=list)
    aborted: bool = False

    def note(
        self,
        step: str,
        message: str,
        severity: FindingSeverity = FindingSeverity.INFO,
    ) -> Finding:
        finding = Finding(step=step, message=message, severity=severity)
        self.findings.append(finding)
        return finding

    @property
    def problems(self) -> list[Finding]:
        return [f for f in self.findings if f.severity is not FindingSeverity.INFO]
