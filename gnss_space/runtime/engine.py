"""Step-wise scheduler for space segment runs."""

from __future__ import annotations

from typing import Any, Callable, Sequence

from gnss_space.models import SegmentEpoch
from gnss_space.runtime.steppable import Steppable
from gnss_space.state import SimState


class SimulationEngine:
    """Drive a fixed set of steppables through one tick per ``dt``."""

    def __init__(
        self,
        state: SimState,
        steppables: Sequence[Steppable],
        dt: float,
        logger: Callable[[dict[str, Any]], None] | None = None,
    ) -> None:
        if dt <= 0.0:
            raise ValueError("dt must be > 0.")
        self.state = state
        self.steppables = list(steppables)
        self.dt = float(dt)
        self.logger = logger
        self._tick = 0

    def reset(self) -> dict[str, Any]:
        self._tick = 0
        self.state.t = 0.0
        for obj in self.steppables:
            obj.reset()
        return self._emit(updated=[True] * len(self.steppables))

    def step(self) -> dict[str, Any]:
        self._tick += 1
        # Time stays on the dt grid.
        self.state.t = self._tick * self.dt
        updated = [obj.step() for obj in self.steppables]
        return self._emit(updated=updated)

    def run(self, duration: float) -> list[SegmentEpoch]:
        """Reset, then step until ``duration`` seconds; return every recorded epoch."""

        num_steps = int(round(float(duration) / self.dt))
        epochs: list[SegmentEpoch] = list(self.reset()["epochs"])
        for _ in range(num_steps):
            epochs.extend(self.step()["epochs"])
        return epochs

    def _emit(self, *, updated: list[bool]) -> dict[str, Any]:
        epochs = [
            obj.snapshot()
            for obj in self.steppables
            if callable(getattr(obj, "snapshot", None))
        ]
        output = {"t": self.state.t, "updated": updated, "epochs": epochs}
        if self.logger is not None:
            self.logger(output)
        return output
