"""Bounded playback of a completed integration."""

import copy
import logging
from typing import Iterable, Optional
from numpy.typing import NDArray

from ephemerides.core.state import (
    ORBIT_STATE_LENGTH,
    ElementMassDecoder,
    OrbitalState,
    StateDecoder,
)
from ephemerides.dense.base import DenseOutputModel
from ephemerides.dense.solution import OdeSolutionModel
from ephemerides.errors import (
    DuplicateChannelName,
    EphemerisError,
    NonResettableState,
    OutOfRangeQuery,
    UnknownChannel,
    UpstreamDecodeFailure,
)
from ephemerides.playback.channels import ChannelExtractor

logger = logging.getLogger(__name__)


class TrajectoryPlayback:
    """
    Read-only, random-access view over a dense integration output.

    The engine exclusively owns its dense model and moves the model's single
    cursor on every query, so one engine must not be queried from several
    threads. Use clone() to get an independent view.
    """

    def __init__(
        self,
        start_date: float,
        min_date: float,
        max_date: float,
        decoder: StateDecoder,
        model: DenseOutputModel,
        channels: Iterable[tuple[str, int]] = (),
    ):
        """
        Initialize playback over a finished integration.

        Args:
            start_date: Integration anchor epoch (min_date or max_date)
            min_date: First valid query date (inclusive)
            max_date: Last valid query date (inclusive)
            decoder: Maps raw vectors to structured states
            model: Dense output model, owned by this engine from now on
            channels: (name, length) pairs registered in order
        """
        if min_date > max_date:
            raise ValueError(
                f"min_date {min_date!r} is after max_date {max_date!r}"
            )
        if start_date != min_date and start_date != max_date:
            raise ValueError(
                f"start_date {start_date!r} must equal min_date or max_date"
            )

        self._start_date = start_date
        self._min_date = min_date
        self._max_date = max_date
        self._decoder = decoder
        self._model = model
        self._channels: dict[str, ChannelExtractor] = {}
        self._next_offset = ORBIT_STATE_LENGTH

        for name, length in channels:
            self.register_channel(name, length)

        logger.debug(
            "playback over [%r, %r] anchored at %r with %d channel(s)",
            min_date, max_date, start_date, len(self._channels),
        )

    @classmethod
    def from_solution(
        cls,
        result,
        decoder: Optional[StateDecoder] = None,
        channels: Iterable[tuple[str, int]] = (),
    ) -> "TrajectoryPlayback":
        """
        Build playback from a ``solve_ivp(..., dense_output=True)`` result.

        The first output time is the anchor; backward integrations therefore
        anchor at max_date.
        """
        model = OdeSolutionModel.from_result(result)
        return cls(
            start_date=model.start,
            min_date=model.t_min,
            max_date=model.t_max,
            decoder=decoder if decoder is not None else ElementMassDecoder(),
            model=model,
            channels=channels,
        )

    @property
    def start_date(self) -> float:
        return self._start_date

    @property
    def min_date(self) -> float:
        return self._min_date

    @property
    def max_date(self) -> float:
        return self._max_date

    @property
    def channels(self) -> tuple[ChannelExtractor, ...]:
        """Registered channels in registration order."""
        return tuple(self._channels.values())

    @property
    def raw_length(self) -> int:
        """Expected raw vector length for the registered layout."""
        return self._next_offset

    def register_channel(self, name: str, length: int) -> ChannelExtractor:
        """
        Map the next unused raw entries to a named auxiliary channel.

        Args:
            name: Unique channel name
            length: Number of raw entries, > 0

        Returns:
            Extractor reading raw[offset:offset + length]
        """
        if name in self._channels:
            raise DuplicateChannelName(name)
        if length <= 0:
            raise ValueError(f"channel {name!r} needs a positive length, got {length}")

        extractor = ChannelExtractor(name, self._next_offset, length, self)
        self._channels[name] = extractor
        self._next_offset += length
        logger.debug(
            "registered channel %r at raw[%d:%d]",
            name, extractor.offset, extractor.stop,
        )
        return extractor

    def channel(self, name: str) -> ChannelExtractor:
        try:
            return self._channels[name]
        except KeyError:
            raise UnknownChannel(name) from None

    def state_at(self, date: float) -> OrbitalState:
        """
        Decoded state at a date within [min_date, max_date].

        Args:
            date: Query date

        Returns:
            Orbit and mass at date, without auxiliary channels

        Raises:
            OutOfRangeQuery: date outside the valid span
            UpstreamDecodeFailure: dense model or decoder failed
        """
        raw = self._position(date)
        try:
            return self._decoder.decode(date, raw)
        except EphemerisError:
            raise
        except Exception as exc:
            raise UpstreamDecodeFailure(date, str(exc)) from exc

    def propagate(self, date: float) -> OrbitalState:
        """State at date with every registered channel attached."""
        state = self.state_at(date)
        for name, extractor in self._channels.items():
            state = state.with_additional_state(name, extractor.extract(date))
        return state

    def additional_state(self, name: str, date: float) -> NDArray:
        return self.channel(name).extract(date)

    def orbit_at(self, date: float) -> NDArray:
        return self.state_at(date).elements

    def mass_at(self, date: float) -> float:
        return self.state_at(date).mass

    @property
    def initial_state(self) -> OrbitalState:
        """State at the first date of the range."""
        return self.state_at(self._min_date)

    def reset_initial_state(self, state: OrbitalState) -> None:
        raise NonResettableState()

    def clone(self) -> "TrajectoryPlayback":
        """Independent engine over a private copy of the dense model."""
        return TrajectoryPlayback(
            self._start_date,
            self._min_date,
            self._max_date,
            self._decoder,
            copy.deepcopy(self._model),
            [(c.name, c.length) for c in self._channels.values()],
        )

    def _position(self, date: float) -> NDArray:
        """Move the model cursor to date (if needed) and return the raw vector."""
        if not (self._min_date <= date <= self._max_date):
            raise OutOfRangeQuery(date, self._min_date, self._max_date)

        elapsed = date - self._start_date
        try:
            if self._model.interpolated_time != elapsed:
                self._model.set_interpolated_time(elapsed)
            return self._model.interpolated_state
        except EphemerisError:
            raise
        except Exception as exc:
            raise UpstreamDecodeFailure(date, str(exc)) from exc
