"""
Scripted driver for the mixing engine.

Scenarios are JSON documents validated with pydantic and replayed through
the engine's public commands.
"""
from barkeep.harness.models import Scenario, StepResult
from barkeep.harness.runner import build_engine, run_command, run_scenario

__all__ = ["Scenario", "StepResult", "build_engine", "run_command", "run_scenario"]
