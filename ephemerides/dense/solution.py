"""Adapter for scipy's solve_ivp dense output."""

from numpy.typing import NDArray
from scipy.integrate import OdeSolution

from ephemerides.dense.base import CursorModel


class OdeSolutionModel(CursorModel):
    """Cursor over a ``scipy.integrate.OdeSolution``."""

    def __init__(self, solution: OdeSolution):
        self.solution = solution
        super().__init__(solution.ts[0], solution.t_min, solution.t_max)

    @classmethod
    def from_result(cls, result) -> "OdeSolutionModel":
        """
        Wrap the dense output of a solve_ivp result.

        Args:
            result: Object returned by ``solve_ivp(..., dense_output=True)``

        Returns:
            Dense model positioned at the integration start
        """
        if getattr(result, "sol", None) is None:
            raise ValueError(
                "integration result carries no dense output; "
                "call solve_ivp with dense_output=True"
            )
        return cls(result.sol)

    def _evaluate(self, t: float) -> NDArray:
        return self.solution(t)
