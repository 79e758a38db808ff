"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan los escenarios concretos.
"""

from core.interfaces.scenario import ProbeScenario

__all__ = ["ProbeScenario"]
