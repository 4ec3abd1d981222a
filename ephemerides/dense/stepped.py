"""Dense output rebuilt from stored integrator steps."""

from dataclasses import dataclass
import numpy as np
from numpy.typing import NDArray
from scipy.interpolate import CubicHermiteSpline

from ephemerides.dense.base import CursorModel


@dataclass
class SteppedTrajectory:
    """Step-boundary storage of a completed integration."""

    t: NDArray      # (N+1,) step boundaries, strictly monotonic
    Y: NDArray      # (N+1, n) raw state at each boundary
    Ydot: NDArray   # (N+1, n) state derivative at each boundary

    def __post_init__(self):
        self.t = np.asarray(self.t, dtype=float)
        self.Y = np.atleast_2d(np.asarray(self.Y, dtype=float))
        self.Ydot = np.atleast_2d(np.asarray(self.Ydot, dtype=float))

        if self.t.ndim != 1 or self.t.shape[0] < 2:
            raise ValueError("t must be a 1-D array with at least two boundaries")
        if self.Y.shape != (self.t.shape[0], self.Y.shape[1]):
            raise ValueError(
                f"Y has shape {self.Y.shape}, expected ({self.t.shape[0]}, n)"
            )
        if self.Ydot.shape != self.Y.shape:
            raise ValueError(
                f"Ydot has shape {self.Ydot.shape}, expected {self.Y.shape}"
            )
        dt = np.diff(self.t)
        if not (np.all(dt > 0) or np.all(dt < 0)):
            raise ValueError("step boundaries must be strictly monotonic")

    @property
    def N(self) -> int:
        """Number of steps."""
        return self.t.shape[0] - 1

    @property
    def n(self) -> int:
        """Raw state dimension."""
        return self.Y.shape[1]

    @property
    def forward(self) -> bool:
        """True if the integration ran forward in time."""
        return bool(self.t[-1] > self.t[0])

    def dense_model(self) -> "HermiteStepModel":
        """Cubic Hermite dense output over the stored steps."""
        return HermiteStepModel(self)


class HermiteStepModel(CursorModel):
    """
    Per-step cubic Hermite dense output.

    Each step is interpolated from the values and derivatives at its two
    boundaries, which is the classical dense output of a one-step method
    that only keeps its boundary data.
    """

    def __init__(self, trajectory: SteppedTrajectory):
        self.trajectory = trajectory
        t, Y, Ydot = trajectory.t, trajectory.Y, trajectory.Ydot
        if not trajectory.forward:
            # spline abscissae must increase
            t, Y, Ydot = t[::-1], Y[::-1], Ydot[::-1]
        self._spline = CubicHermiteSpline(t, Y, Ydot, axis=0)
        super().__init__(trajectory.t[0], t[0], t[-1])

    def _evaluate(self, t: float) -> NDArray:
        return self._spline(t)
