"""
stepper.py — Frame-Driven Step Gate
====================================
Turns a continuous frame clock into discrete `ShortestPathEngine.step()`
calls.  The Stepper is the ONLY object a frame loop talks to during a run.

Each `tick(delta)` adds `delta * speed` to an accumulator.  Once the
accumulator reaches `step_threshold` it is zeroed and exactly one engine
step runs, however far past the threshold it went.  One tick never does
more than one step, so a long frame can't stall the caller.

State (derived, never stored separately from the engine phase):
    IDLE      – engine has no run
    PLAYING   – engine running, not paused
    PAUSED    – engine running, paused
    FINISHED  – engine reached Found / Exhausted

Thread safety:
  This class is NOT thread-safe.  Drive it from a single thread (the
  render loop or the request handler holding the run).
"""

import logging
import math
from enum import Enum
from typing import Callable, List, Optional

from algorithms import Exhausted, Found, ShortestPathEngine, StepEvent


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Timing defaults
# ---------------------------------------------------------------------------
# Frame-delta units: a 60 fps ticker reports ~1.0 per frame, so one step
# every 20 frames (~3 steps / second) at speed 1.
STEP_THRESHOLD = 20.0
DEFAULT_SPEED  = 1.0

# Speed multipliers
SPEED_PRESETS = {
    "slow":   0.5,
    "normal": 1.0,
    "fast":   2.0,
    "turbo":  4.0,
}


Listener = Callable[[StepEvent], None]


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        engine         : The ShortestPathEngine being paced.
        step_threshold : Accumulated (scaled) time per step.
        speed          : Multiplier on incoming frame deltas.
        steps_taken    : Engine steps triggered since the last reset.
        on_found       : Optional callback(Found) when a run ends with a path.
        on_exhausted   : Optional callback(Exhausted) when a run ends without one.
    """

    def __init__(
        self,
        engine: ShortestPathEngine,
        step_threshold: float = STEP_THRESHOLD,
        speed: float = DEFAULT_SPEED,
        on_step: Optional[Listener] = None,
    ):
        if step_threshold <= 0:
            raise ValueError(f"step_threshold must be positive, got {step_threshold!r}")
        self.engine:         ShortestPathEngine = engine
        self.step_threshold: float = step_threshold
        self.speed:          float = DEFAULT_SPEED
        self.steps_taken:    int   = 0
        self.on_found:       Optional[Callable[[Found], None]]     = None
        self.on_exhausted:   Optional[Callable[[Exhausted], None]] = None

        self._accumulated: float = 0.0
        self._paused:      bool  = False
        self._listeners:   List[Listener] = []

        self.set_speed(speed)
        if on_step is not None:
            self.subscribe(on_step)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a StepEvent listener.  Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Tick  (call this once per frame)
    # ------------------------------------------------------------------
    def tick(self, delta_time: float) -> Optional[StepEvent]:
        """
        Returns the StepEvent if this tick triggered a step, else None.
        No-op while paused or when the engine has no active run.
        """
        if self._paused or not self.engine.is_running:
            return None

        self._accumulated += delta_time * self.speed
        if self._accumulated < self.step_threshold:
            return None

        self._accumulated = 0.0
        event = self.engine.step()
        self.steps_taken += 1
        logger.debug("Tick triggered step %d: %s", self.steps_taken, event.kind)
        self._notify(event)
        return event

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def pause(self) -> None:
        self._paused = True

    def resume(self) -> None:
        self._paused = False

    def toggle_pause(self) -> None:
        self._paused = not self._paused

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, multiplier: float) -> None:
        if isinstance(multiplier, bool) or not (isinstance(multiplier, (int, float)) and 0 < multiplier < math.inf):
            raise ValueError(f"speed must be in (0, inf), got {multiplier!r}")
        self.speed = float(multiplier)

    def set_speed_preset(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise ValueError(f"unknown speed preset {preset!r}; choose from {sorted(SPEED_PRESETS)}")
        self.set_speed(SPEED_PRESETS[preset])

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Zero the accumulator, unpause and drop the engine's run."""
        self._accumulated = 0.0
        self._paused      = False
        self.steps_taken  = 0
        self.engine.reset()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> StepperState:
        if self.engine.is_finished:
            return StepperState.FINISHED
        if not self.engine.is_running:
            return StepperState.IDLE
        return StepperState.PAUSED if self._paused else StepperState.PLAYING

    @property
    def accumulated(self) -> float:
        return self._accumulated

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def is_finished(self) -> bool:
        return self.engine.is_finished

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _notify(self, event: StepEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
        if isinstance(event, Found) and self.on_found:
            self.on_found(event)
        elif isinstance(event, Exhausted) and self.on_exhausted:
            self.on_exhausted(event)
