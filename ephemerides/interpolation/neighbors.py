"""Neighborhood selection over an ordered sample grid."""

from typing import Sequence


def closest_index(abscissae: Sequence[float], date: float, hint: int) -> int:
    """
    Index of the sample closest to date.

    Dates at or beyond either end clamp to that end. Otherwise the search
    walks outward from hint until date is bracketed by two adjacent samples
    and returns the closer one, the lower on a tie. The hint only changes
    how far the walk goes, never the result.

    Args:
        abscissae: Strictly ascending, non-empty sample dates
        date: Query date
        hint: Starting index, 0 <= hint < len(abscissae)

    Returns:
        Index of the closest sample
    """
    last = len(abscissae) - 1
    if date <= abscissae[0]:
        return 0
    if date >= abscissae[last]:
        return last

    lower = upper = hint
    if date > abscissae[hint]:
        upper += 1
        while date > abscissae[upper]:
            upper += 1
            lower += 1
    else:
        lower -= 1
        while date < abscissae[lower]:
            upper -= 1
            lower -= 1

    lower_distance = abs(date - abscissae[lower])
    upper_distance = abs(abscissae[upper] - date)
    return lower if lower_distance <= upper_distance else upper


def select_neighborhood(
    abscissae: Sequence[float], date: float, closest: int, size: int
) -> list[int]:
    """
    Grow a neighborhood of `size` indices outward from `closest`.

    At each step the nearer of the two outward candidates joins, the lower
    one on a tie; once one side reaches the grid boundary the other side
    fills the remaining slots.

    Args:
        abscissae: Strictly ascending sample dates
        date: Query date
        closest: Index of the closest sample to date
        size: Neighborhood size, <= len(abscissae)

    Returns:
        Selected indices, closest first, in order of selection
    """
    count = len(abscissae)
    neighbors = [closest]
    lower, upper = closest - 1, closest + 1

    while len(neighbors) < size:
        if lower < 0:
            neighbors.append(upper)
            upper += 1
        elif upper >= count:
            neighbors.append(lower)
            lower -= 1
        elif abs(abscissae[lower] - date) <= abs(abscissae[upper] - date):
            neighbors.append(lower)
            lower -= 1
        else:
            neighbors.append(upper)
            upper += 1

    return neighbors


class NeighborLocator:
    """
    Closest-sample search that remembers its last answer.

    Queries during propagation arrive in near-monotonic time order, so
    starting each search from the previous result keeps the walk short.
    With persistent=False the hint is reset before every search; results
    are identical either way.
    """

    def __init__(self, persistent: bool = True):
        self.persistent = persistent
        self.hint = 0

    def locate(self, abscissae: Sequence[float], date: float) -> int:
        if not self.persistent or self.hint >= len(abscissae):
            self.hint = 0
        self.hint = closest_index(abscissae, date, self.hint)
        return self.hint

    def reset(self) -> None:
        self.hint = 0
