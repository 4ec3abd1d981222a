"""Trajectory playback over dense integration output."""

from ephemerides.playback.ephemeris import TrajectoryPlayback
from ephemerides.playback.channels import ChannelExtractor

__all__ = [
    "TrajectoryPlayback",
    "ChannelExtractor",
]
