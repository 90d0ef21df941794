# elastobar/config.py
"""
Solver configuration and defaults.
"""

from dataclasses import dataclass


@dataclass
class SolverConfig:
    """Global solver configuration."""

    # Domain and boundary data
    length: float = 0.1          # m
    g1: float = 0.0              # prescribed u(0)
    g2: float = 0.001            # prescribed u(L), variant 1 only

    # Material / load constants
    modulus: float = 1e11        # E (Pa)
    load: float = 1e11           # f, body load is f * x
    flux: float = 1e10           # h, E u'(L) for variant 2

    # Discretization defaults
    variant: int = 1             # 1 = Dirichlet/Dirichlet, 2 = Dirichlet/Neumann
    order: int = 1
    n_elements: int = 10

    # Numerical knobs
    quad_points: int = 3
    boundary_rtol: float = 1e-12  # relative to domain length
    log_level: str = "WARNING"


# Global config instance
CONFIG = SolverConfig()
