"""Scenario repository and its document codec."""

from .codec import converter, decode_scenario, encode_scenario
from .repository import ScenarioRepository, utc_now

__all__ = ["converter", "decode_scenario", "encode_scenario", "ScenarioRepository", "utc_now"]
