"""Recording of routing decisions for inspection."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import Point, Rect

# Number of finished sessions kept by a recorder
MAX_SESSIONS = 50


@dataclass
class RoutingStep:
    """One decision taken while routing a link."""

    step: int
    description: str
    decision: str
    path_points: list[Point] | None = None
    rejected: bool = False
    reason: str | None = None


@dataclass
class RoutingDebugSession:
    """All decisions taken while routing one link."""

    source_id: str
    target_id: str
    start_point: Point
    end_point: Point
    obstacles: list[Rect]
    timestamp: float = field(default_factory=time.time)
    steps: list[RoutingStep] = field(default_factory=list)
    final_path: list[Point] = field(default_factory=list)
    final_strategy: str = ""


class RoutingDebugRecorder:
    """Collects routing sessions while enabled.

    The recorder belongs to the caller; the router only writes to the one
    it is handed. A disabled recorder ignores every call.
    """

    def __init__(self, enabled: bool = False, max_sessions: int = MAX_SESSIONS):
        self._enabled = enabled
        self.max_sessions = max_sessions
        self._sessions: list[RoutingDebugSession] = []
        self._current: RoutingDebugSession | None = None

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def sessions(self) -> list[RoutingDebugSession]:
        return list(self._sessions)

    def start_session(
        self,
        source_id: str,
        target_id: str,
        start_point: Point,
        end_point: Point,
        obstacles: Iterable[Rect],
    ) -> None:
        """Begin recording a new link."""
        if not self._enabled:
            return
        self._current = RoutingDebugSession(
            source_id=source_id,
            target_id=target_id,
            start_point=start_point,
            end_point=end_point,
            obstacles=list(obstacles),
        )

    def add_step(
        self,
        description: str,
        decision: str,
        path_points: Iterable[Point] | None = None,
        rejected: bool = False,
        reason: str | None = None,
    ) -> None:
        """Record a decision in the current session."""
        if not self._enabled or self._current is None:
            return
        self._current.steps.append(RoutingStep(
            step=len(self._current.steps) + 1,
            description=description,
            decision=decision,
            path_points=list(path_points) if path_points is not None else None,
            rejected=rejected,
            reason=reason,
        ))

    def end_session(self, final_path: Iterable[Point], final_strategy: str) -> None:
        """Close the current session and keep it."""
        if not self._enabled or self._current is None:
            return
        self._current.final_path = list(final_path)
        self._current.final_strategy = final_strategy
        self._sessions.append(self._current)
        self._current = None

        if len(self._sessions) > self.max_sessions:
            self._sessions = self._sessions[-self.max_sessions:]

    def latest_session(self) -> RoutingDebugSession | None:
        return self._sessions[-1] if self._sessions else None

    def clear(self) -> None:
        self._sessions = []
        self._current = None
