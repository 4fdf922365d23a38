# geometry.py
"""
Distance, angle and connector-opacity helpers.

The scalar helpers accept any indexable 2D point (tuples, lists or NumPy
arrays). The pairwise connector scan is compiled with Numba and works on a
float64 array of shape (N, 2).
"""
import math
import numpy as np
from numba import jit
from typing import Sequence, Tuple

# --- Data Contracts ---
#
# distance(a, b) -> float:
#   - Euclidean norm of (b - a). Always >= 0.
#
# angle_radians(origin, target) -> float:
#   - Angle of the vector origin -> target, in (-pi, pi]. 0.0 when the points
#     coincide.
#
# connector_opacity(distance, full_opacity_distance, min_distance) -> float:
#   - 1.0 up to full_opacity_distance, then falls linearly to 0.0 at
#     min_distance. Not clamped.
#
# find_connections(positions, max_distance) -> (first, second, distances):
#   - positions: float64 array of shape (N, 2).
#   - Outputs three arrays of equal length K, one entry per unordered pair
#     (i < j) closer than max_distance, ordered by i then j.

Point = Sequence[float]


def distance(a: Point, b: Point) -> float:
    """Returns the Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def angle_radians(origin: Point, target: Point) -> float:
    """Returns the angle of the vector from `origin` to `target`."""
    dx = target[0] - origin[0]
    dy = target[1] - origin[1]
    if dx == 0 and dy == 0:
        return 0.0
    return math.atan2(dy, dx)


def connector_opacity(distance: float, full_opacity_distance: float, min_distance: float) -> float:
    """
    Maps a distance to a connector opacity.

    Distances up to `full_opacity_distance` are fully opaque; beyond that the
    opacity decreases linearly and reaches 0 at `min_distance`. Values past
    `min_distance` come out negative.
    """
    if distance <= full_opacity_distance:
        return 1.0
    return 1.0 - (distance - full_opacity_distance) / (min_distance - full_opacity_distance)


@jit(nopython=True)
def _find_connections_numba(positions, max_distance):
    """
    Numba-jitted O(n^2) scan over every unordered pair of positions.
    """
    count = positions.shape[0]
    capacity = count * (count - 1) // 2
    first = np.empty(capacity, dtype=np.int64)
    second = np.empty(capacity, dtype=np.int64)
    distances = np.empty(capacity, dtype=np.float64)

    found = 0
    for i in range(count):
        for j in range(i + 1, count):
            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            dist = np.sqrt(dx * dx + dy * dy)
            if dist < max_distance:
                first[found] = i
                second[found] = j
                distances[found] = dist
                found += 1

    return first[:found], second[:found], distances[:found]


def find_connections(positions: np.ndarray, max_distance: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Finds every pair of positions closer than `max_distance`.

    Args:
        positions (np.ndarray): Particle positions, shape (N, 2).
        max_distance (float): Exclusive upper bound on the pair distance.

    Returns:
        Tuple of (first indices, second indices, distances).
    """
    positions = np.ascontiguousarray(positions, dtype=np.float64).reshape(-1, 2)
    return _find_connections_numba(positions, float(max_distance))
