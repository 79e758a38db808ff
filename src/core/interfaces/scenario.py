"""Contratos de escenarios de diagnóstico.

Por qué Protocol:
- Cada escenario (barrido de API, ciclo de vida, tipos) es intercambiable
  para la CLI sin herencia rígida.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from core.domain.models import ScenarioReport

if TYPE_CHECKING:
    import httpx

    from core.services.probe_runner import RunnerHooks


@runtime_checkable
class ProbeScenario(Protocol):
    """Contrato mínimo para un escenario.

    Reglas de diseño:
    - `run` es asíncrono porque hace I/O (HTTP), pero las peticiones van una a una.
    - Si no se pasa `client`, el escenario abre y cierra el suyo.
    """

    name: str

    async def run(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        hooks: RunnerHooks | None = None,
    ) -> ScenarioReport:
        """Ejecuta el escenario y devuelve su reporte."""

        ...
