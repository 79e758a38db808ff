"""Escenarios de diagnóstico (uno por flujo manual).

Cada módulo implementa `core.interfaces.scenario.ProbeScenario`.
"""

from adapters.scenarios.api_sweep import ApiSweepScenario
from adapters.scenarios.lifecycle import LifecycleScenario
from adapters.scenarios.type_tags import TypeTagsScenario

__all__ = [
    "ApiSweepScenario",
    "LifecycleScenario",
    "TypeTagsScenario",
]
