# element loop: local kernels, flux term, scatter into the global system

from typing import List, Optional, Tuple

import numpy as np

from .basis import LagrangeBasis
from .elements import local_stiffness, local_load
from .kernel.assemble import GlobalSystem
from .kernel.dof import DirichletMap
from .logs import logger
from .mesh import IntervalMesh
from .model import BarProblem
from .quadrature import GaussQuadrature


def required_degree(order: int) -> int:
    """
    Highest polynomial degree the element integrals must integrate exactly.
    Stiffness: dN_A dN_B is degree 2p - 2.
    Load: N_A times a source linear in x is degree p + 1.
    """
    return max(2 * order - 2, order + 1)


def element_contributions(
    mesh: IntervalMesh,
    problem: BarProblem,
    basis: LagrangeBasis,
    quad: GaussQuadrature,
    boundary_rtol: float = 1e-12,
) -> List[Tuple[np.ndarray, np.ndarray, np.ndarray]]:
    """
    Compute (dof_map, ke, fe) for every element.

    Elements do not depend on each other here; only the scatter that
    follows touches shared state.

    For variant 2 the flux h enters the load entry of local node 1 of the
    element whose right end sits at x = L.
    """
    if basis.order != mesh.order:
        raise ValueError(f"Basis order {basis.order} does not match mesh order {mesh.order}.")
    quad.require_exactness(required_degree(basis.order))

    contributions = []
    for dofs, coords in mesh:
        ke = local_stiffness(coords, basis, quad, problem.modulus)
        fe = local_load(coords, basis, quad, problem.body_load)

        if problem.has_neumann_end and np.isclose(
            coords[1], problem.length, rtol=0.0, atol=boundary_rtol * problem.length
        ):
            fe[1] += problem.flux

        contributions.append((dofs, ke, fe))
    return contributions


def assemble_system(
    mesh: IntervalMesh,
    problem: BarProblem,
    basis: LagrangeBasis,
    quad: GaussQuadrature,
    constraints: Optional[DirichletMap] = None,
    system: Optional[GlobalSystem] = None,
    boundary_rtol: float = 1e-12,
) -> GlobalSystem:
    """
    Build the global system K D = F.

    Parameters:
    -----------
    mesh : IntervalMesh
        Connectivity and coordinate tables
    problem : BarProblem
        Material, load and boundary data
    basis, quad : LagrangeBasis, GaussQuadrature
        Shared with the error evaluator
    constraints : DirichletMap, optional
        If given, applied after assembly. Leave out to inspect the raw
        (unconstrained) stiffness matrix.
    system : GlobalSystem, optional
        Reused (re-initialized) if given, so repeated solves don't reallocate
    """
    contributions = element_contributions(mesh, problem, basis, quad, boundary_rtol)

    if system is None:
        system = GlobalSystem(mesh.n_dofs)
    elif system.n_dofs != mesh.n_dofs:
        raise ValueError(f"System has {system.n_dofs} DOFs but mesh has {mesh.n_dofs}.")

    system.begin_assembly()
    for dofs, ke, fe in contributions:
        system.add_local(dofs, ke, fe)
    system.end_assembly()
    logger.debug("Assembled %d elements into %d DOFs (nnz=%d)",
                 mesh.n_elements, mesh.n_dofs, system.stiffness.nnz)

    if constraints is not None:
        system.apply_dirichlet(constraints)
        logger.debug("Applied %d Dirichlet constraints", len(constraints))
    return system
