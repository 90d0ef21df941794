# elastobar/kernel - Problem-agnostic linear algebra core
"""
KERNEL: CONSTRAINTS, ASSEMBLY AND SOLVE
=======================================

The kernel does not know about basis functions or quadrature. It only needs:
- A set of (dof_map, ke, fe) element contributions
- A map of constrained DOFs to prescribed values
- A sparse direct solver

Element kernels (elastobar.elements) are problem-specific; the plumbing
here is not.
"""

from .dof import DirichletMap, boundary_dofs
from .assemble import GlobalSystem, assemble_global
from .solve import solve_sparse, residual_norm, SingularSystemError

__all__ = [
    'DirichletMap',
    'boundary_dofs',
    'GlobalSystem',
    'assemble_global',
    'solve_sparse',
    'residual_norm',
    'SingularSystemError',
]
