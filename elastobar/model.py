# Problem definition: variants, validated input data, closed-form solution

from dataclasses import dataclass, fields
from enum import IntEnum

import numpy as np

from .config import SolverConfig, CONFIG

SUPPORTED_ORDERS = (1, 2, 3)


class ConfigurationError(ValueError):
    """Raised for invalid problem setup (variant, order, node index, ...)."""
    pass


class ProblemVariant(IntEnum):
    DIRICHLET_DIRICHLET = 1   # u(0) = g1, u(L) = g2
    DIRICHLET_NEUMANN = 2     # u(0) = g1, E u'(L) = h


def check_order(order: int) -> int:
    if order not in SUPPORTED_ORDERS:
        raise ConfigurationError(
            f"Basis order must be one of {SUPPORTED_ORDERS}, got {order}."
        )
    return int(order)


@dataclass(frozen=True)
class BarProblem:
    """
    Elastostatic bar problem  E u'' + f x = 0  on (0, L).

    Attributes:
    -----------
    length : float
        Domain length L (m)
    g1, g2 : float
        Prescribed displacement at x = 0 and, for variant 1, at x = L
    modulus : float
        Elastic coefficient E (Pa)
    load : float
        Body load coefficient f; the source term is f * x
    flux : float
        Boundary flux h = E u'(L), used by variant 2 only
    variant : ProblemVariant
        1 = two Dirichlet ends, 2 = Dirichlet + Neumann
    order : int
        Lagrange basis order (1, 2 or 3)
    n_elements : int
        Number of elements in the uniform mesh
    """
    length: float = CONFIG.length
    g1: float = CONFIG.g1
    g2: float = CONFIG.g2
    modulus: float = CONFIG.modulus
    load: float = CONFIG.load
    flux: float = CONFIG.flux
    variant: ProblemVariant = ProblemVariant(CONFIG.variant)
    order: int = CONFIG.order
    n_elements: int = CONFIG.n_elements

    def __post_init__(self):
        try:
            variant = ProblemVariant(self.variant)
        except ValueError:
            raise ConfigurationError(
                f"Problem variant should be 1 or 2, got {self.variant}."
            ) from None
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "variant", variant)
        check_order(self.order)
        if self.n_elements < 1:
            raise ConfigurationError(f"Need at least one element, got {self.n_elements}.")
        if not self.length > 0.0:
            raise ConfigurationError(f"Domain length must be positive, got {self.length}.")
        if not self.modulus > 0.0:
            raise ConfigurationError(f"Elastic modulus must be positive, got {self.modulus}.")

    @classmethod
    def from_config(cls, config: SolverConfig = CONFIG, **overrides) -> "BarProblem":
        """Build a problem from a SolverConfig, with keyword overrides."""
        values = {f.name: getattr(config, f.name) for f in fields(cls)}
        values.update(overrides)
        return cls(**values)

    @property
    def has_neumann_end(self) -> bool:
        return self.variant == ProblemVariant.DIRICHLET_NEUMANN

    def body_load(self, x):
        """Source term f(x) = load * x."""
        return self.load * np.asarray(x, dtype=float)

    def exact_solution(self, x):
        """
        Closed-form displacement for the active variant.

        variant 1:  u = -f x^3/(6E) + (g2 - g1 + f L^3/(6E))/L * x + g1
        variant 2:  u = -f x^3/(6E) + (h + f L^2/2)/E * x + g1
        """
        x = np.asarray(x, dtype=float)
        E, f, L = self.modulus, self.load, self.length
        cubic = -f * x**3 / (6.0 * E)
        if self.variant == ProblemVariant.DIRICHLET_DIRICHLET:
            slope = (self.g2 - self.g1 + f * L**3 / (6.0 * E)) / L
        else:
            slope = (self.flux + 0.5 * f * L**2) / E
        return cubic + slope * x + self.g1
