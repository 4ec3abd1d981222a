"""Dense output models consumed by the playback engine."""

from ephemerides.dense.base import DenseOutputModel, CursorModel
from ephemerides.dense.solution import OdeSolutionModel
from ephemerides.dense.stepped import SteppedTrajectory, HermiteStepModel

__all__ = [
    "DenseOutputModel",
    "CursorModel",
    "OdeSolutionModel",
    "SteppedTrajectory",
    "HermiteStepModel",
]
