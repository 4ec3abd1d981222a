"""Error types raised by playback and interpolation."""


class EphemerisError(Exception):
    """Base class for all errors raised by ephemerides."""


class OutOfRangeQuery(EphemerisError, ValueError):
    """Requested date lies outside the [min_date, max_date] span."""

    def __init__(self, date: float, min_date: float, max_date: float):
        self.date = date
        self.min_date = min_date
        self.max_date = max_date
        super().__init__(
            f"date {date!r} is out of range [{min_date!r}, {max_date!r}]"
        )


class DuplicateChannelName(EphemerisError, ValueError):
    """An auxiliary channel with the same name is already registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"auxiliary channel {name!r} is already registered")


class UnknownChannel(EphemerisError, KeyError):
    """No auxiliary channel is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"unknown auxiliary channel {self.name!r}"


class DetachedChannel(EphemerisError, ReferenceError):
    """Channel extractor outlived the playback engine it reads from."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"auxiliary channel {name!r} is detached from its playback engine"
        )


class EmptyGridQuery(EphemerisError, LookupError):
    """Interpolation requested on a grid holding no samples."""

    def __init__(self, date: float):
        self.date = date
        super().__init__(f"cannot interpolate at {date!r}: the grid is empty")


class UpstreamDecodeFailure(EphemerisError, RuntimeError):
    """Dense model or decoder failed to produce a usable raw vector."""

    def __init__(self, date: float, reason: str):
        self.date = date
        super().__init__(f"failed to decode state at {date!r}: {reason}")


class NonResettableState(EphemerisError, RuntimeError):
    """Playback engines are read-only views and cannot be re-seeded."""

    def __init__(self):
        super().__init__("the initial state of a playback engine cannot be reset")
