"""
Lane runner engine.

The package is split into data models, lane geometry, the per-frame session
simulation, and drivers (the asyncio scheduler and input classification).
Rendering is left to the caller, which reads ``RenderSnapshot`` frames.
"""

from .controls import autopilot, classify_swipe, direction_for_key  # noqa: F401
from .data_models import (  # noqa: F401
    Actor,
    EndReason,
    Obstacle,
    Outcome,
    PowerUp,
    PowerUpType,
    RenderSnapshot,
    RunnerConfig,
    SessionState,
    SessionStateError,
)
from .geometry import LaneSet, boxes_overlap  # noqa: F401
from .telemetry import TelemetryActorFrame, TelemetryCollector, TelemetryFrame  # noqa: F401
from .session import RunnerSession  # noqa: F401
from .scheduler import RunnerScheduler  # noqa: F401

__all__ = [
    "autopilot",
    "classify_swipe",
    "direction_for_key",
    "Actor",
    "EndReason",
    "Obstacle",
    "Outcome",
    "PowerUp",
    "PowerUpType",
    "RenderSnapshot",
    "RunnerConfig",
    "SessionState",
    "SessionStateError",
    "LaneSet",
    "boxes_overlap",
    "TelemetryActorFrame",
    "TelemetryCollector",
    "TelemetryFrame",
    "RunnerSession",
    "RunnerScheduler",
]
