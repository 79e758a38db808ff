"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP ni la CLI: solo descriptores, resultados y hallazgos.
"""

from core.domain.models import (
    Finding,
    FindingSeverity,
    OutcomeKind,
    ProbeOutcome,
    RequestDescriptor,
    ScenarioReport,
    Source,
    SourceType,
)

__all__ = [
    "Finding",
    "FindingSeverity",
    "OutcomeKind",
    "ProbeOutcome",
    "RequestDescriptor",
    "ScenarioReport",
    "Source",
    "SourceType",
]
