"""Runtime helpers for step-wise space segment simulations."""

from gnss_space.runtime.engine import SimulationEngine
from gnss_space.runtime.steppable import TIME_TOLERANCE_S, Steppable

__all__ = ["SimulationEngine", "Steppable", "TIME_TOLERANCE_S"]
