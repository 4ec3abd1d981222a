"""Auxiliary channel extraction from the raw state vector."""

import weakref
from typing import TYPE_CHECKING, Union
import numpy as np
from numpy.typing import NDArray

from ephemerides.core.state import OrbitalState
from ephemerides.errors import DetachedChannel, UpstreamDecodeFailure

if TYPE_CHECKING:
    from ephemerides.playback.ephemeris import TrajectoryPlayback


class ChannelExtractor:
    """
    Reads one auxiliary channel, raw[offset:offset + length], through the
    playback engine that registered it.

    The extractor only holds a weak reference: once the engine is gone the
    extractor raises DetachedChannel instead of keeping the dense model alive.
    """

    def __init__(
        self,
        name: str,
        offset: int,
        length: int,
        engine: "TrajectoryPlayback",
    ):
        self.name = name
        self.offset = offset
        self.length = length
        self._engine = weakref.ref(engine)

    @property
    def stop(self) -> int:
        """One past the last raw index of this channel."""
        return self.offset + self.length

    @property
    def attached(self) -> bool:
        return self._engine() is not None

    def extract(self, when: Union[float, OrbitalState]) -> NDArray:
        """
        Channel values at a date.

        Args:
            when: Date, or a state whose date is used

        Returns:
            Copy of the channel's slice of the raw vector, shape (length,)
        """
        engine = self._engine()
        if engine is None:
            raise DetachedChannel(self.name)
        date = when.date if isinstance(when, OrbitalState) else when

        raw = np.asarray(engine._position(date), dtype=float)
        if raw.shape[0] < self.stop:
            raise UpstreamDecodeFailure(
                date,
                f"raw vector has {raw.shape[0]} entries, channel {self.name!r} "
                f"needs [{self.offset}, {self.stop})",
            )
        return np.array(raw[self.offset:self.stop], dtype=float)

    __call__ = extract

    def __repr__(self) -> str:
        return (
            f"ChannelExtractor(name={self.name!r}, offset={self.offset}, "
            f"length={self.length})"
        )
