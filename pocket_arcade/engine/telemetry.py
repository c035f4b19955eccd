from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Sequence


@dataclass
class TelemetryActorFrame:
    name: str
    lane: int
    x: float
    y: float
    y_delta: float
    shield: bool


@dataclass
class TelemetryFrame:
    tick: int
    distance: int
    time: int
    state: str
    obstacle_count: int
    power_up_count: int
    actors: List[TelemetryActorFrame] = field(default_factory=list)
    events: List[str] = field(default_factory=list)


class TelemetryCollector:
    def __init__(self) -> None:
        self.frames: List[TelemetryFrame] = []

    def record_frame(self, frame: TelemetryFrame) -> None:
        self.frames.append(frame)

    def export(self) -> Sequence[TelemetryFrame]:
        return tuple(self.frames)

    def as_dicts(self) -> List[Dict[str, Any]]:
        return [asdict(frame) for frame in self.frames]

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.as_dicts(), indent=indent)

    def clear(self) -> None:
        self.frames.clear()
