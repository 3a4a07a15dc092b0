"""
engine/
-------
Pacing & recording layer.

    from engine import Stepper, Recorder
"""

from engine.stepper  import Stepper, StepperState, SPEED_PRESETS, STEP_THRESHOLD
from engine.recorder import Recorder, RunMetrics

__all__ = [
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "STEP_THRESHOLD",
    "Recorder",
    "RunMetrics",
]
