"""Hermite polynomial interpolation over a small sample set."""

from typing import Optional, Sequence, Union
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.interpolate import KroghInterpolator


def hermite_value(
    abscissae: ArrayLike,
    values: ArrayLike,
    derivatives: Optional[Sequence[ArrayLike]] = None,
    at: float = 0.0,
) -> Union[float, NDArray]:
    """
    Evaluate the Hermite interpolating polynomial of the samples.

    The polynomial has degree k(m+1) - 1 for k samples carrying m
    derivative orders each; with no derivatives it is the Lagrange
    polynomial through the values.

    Args:
        abscissae: Sample abscissae (k,), distinct, any order
        values: Sample values (k,) or (k, d)
        derivatives: Optional sequence of m arrays shaped like values;
            entry j holds the (j+1)-th derivative at each abscissa
        at: Evaluation abscissa

    Returns:
        Interpolated value: float for scalar samples, (d,) otherwise
    """
    x = np.asarray(abscissae, dtype=float)
    y = np.asarray(values, dtype=float)
    if x.ndim != 1 or x.size == 0:
        raise ValueError("at least one sample abscissa is required")
    if y.ndim not in (1, 2) or y.shape[0] != x.size:
        raise ValueError(
            f"values have shape {y.shape}, expected ({x.size},) or ({x.size}, d)"
        )
    if np.unique(x).size != x.size:
        raise ValueError("sample abscissae must be distinct")

    scalar = y.ndim == 1
    k = x.size
    columns = [y.reshape(k, -1)]
    for j, d in enumerate(derivatives or ()):
        d = np.asarray(d, dtype=float)
        if d.shape != y.shape:
            raise ValueError(
                f"derivative order {j + 1} has shape {d.shape}, expected {y.shape}"
            )
        columns.append(d.reshape(k, -1))

    # sample points reproduce exactly
    hit = np.flatnonzero(x == at)
    if hit.size:
        exact = y[hit[0]]
        return float(exact) if scalar else exact.copy()

    order = np.argsort(x)
    m1 = len(columns)
    xi = np.repeat(x[order], m1)
    # (k, m1, d) -> value, d1, d2, ... for each abscissa in turn
    yi = np.stack(columns, axis=1)[order].reshape(k * m1, -1)

    result = KroghInterpolator(xi, yi)(at)
    return float(result[0]) if scalar else np.asarray(result)
