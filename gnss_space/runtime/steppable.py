"""Base class for objects advanced by the simulation scheduler."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gnss_space.state import SimState

TIME_TOLERANCE_S = 1e-9


class Steppable(ABC):
    """Object updated once every ``dt`` seconds of simulation time.

    ``step()`` is what the scheduler calls on every tick; it forwards to
    ``update()`` only when at least ``dt`` seconds have elapsed since the last
    update and the object is active.
    """

    def __init__(self, state: SimState, dt: float, active: bool = True) -> None:
        self.state = state
        self.dt = float(dt)
        self.active = bool(active)
        self._last_update_t: float | None = None

    def step(self) -> bool:
        if not self.active:
            return False
        if self._last_update_t is not None:
            elapsed = self.state.t - self._last_update_t
            if elapsed < self.dt - TIME_TOLERANCE_S:
                return False
        self.update()
        self._last_update_t = self.state.t
        return True

    def _mark_updated(self) -> None:
        self._last_update_t = self.state.t

    @abstractmethod
    def reset(self) -> None:
        """Reinitialise the object at the current simulation time."""

    @abstractmethod
    def update(self) -> None:
        """Propagate the object forward by ``dt``."""
