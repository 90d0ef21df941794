# Gauss-Legendre points and weights on [-1, 1]

import numpy as np

from .model import ConfigurationError

MAX_POINTS = 6

# 3-point rule, exact through degree 5
GAUSS_3_POINTS = (-0.7745966692414834, 0.0, 0.7745966692414834)
GAUSS_3_WEIGHTS = (0.5555555555555557, 0.8888888888888888, 0.5555555555555557)


class QuadratureError(ConfigurationError):
    """Raised when a rule cannot integrate the required polynomial degree exactly."""
    pass


class GaussQuadrature:
    """
    Fixed Gauss-Legendre rule on the reference interval.

    An n-point rule integrates polynomials up to degree 2n - 1 exactly.
    Points and weights are read-only after construction.
    """

    def __init__(self, n_points: int = 3):
        if not 1 <= n_points <= MAX_POINTS:
            raise QuadratureError(
                f"Gauss rule size must be between 1 and {MAX_POINTS}, got {n_points}."
            )
        self.n_points = int(n_points)
        if self.n_points == 3:
            points = np.array(GAUSS_3_POINTS, dtype=float)
            weights = np.array(GAUSS_3_WEIGHTS, dtype=float)
        else:
            points, weights = np.polynomial.legendre.leggauss(self.n_points)
        points.setflags(write=False)
        weights.setflags(write=False)
        self.points = points
        self.weights = weights

    @property
    def degree_of_exactness(self) -> int:
        return 2 * self.n_points - 1

    def require_exactness(self, degree: int) -> None:
        """Fail loudly instead of integrating a too-high degree inexactly."""
        if degree > self.degree_of_exactness:
            raise QuadratureError(
                f"{self.n_points}-point Gauss rule is exact up to degree "
                f"{self.degree_of_exactness}, but degree {degree} is required."
            )

    def __iter__(self):
        return zip(self.points, self.weights)

    def __len__(self):
        return self.n_points

    def __repr__(self):
        return f"GaussQuadrature(n_points={self.n_points})"
