import numpy as np


def interpolate(x1, y1, x2, y2, x):
    """
    Straight-line interpolation through (x1, y1) and (x2, y2), evaluated at x.
    Extrapolates outside [x1, x2]. Accepts scalars or numpy arrays for x.
    """
    if x1 == x2:
        # Degenerate segment, no slope to follow
        return y1
    return y1 + (y2 - y1) * (x - x1) / (x2 - x1)


def interpolate_curve(x, x_points, y_points):
    """
    Piecewise-linear lookup on a performance curve (e.g. capacity vs outdoor temp).
    Values outside the curve are clamped to the end points.
    """
    result = np.interp(x, x_points, y_points)
    if np.ndim(result) == 0:
        return float(result)
    return result
