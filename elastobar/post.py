# error norm against the closed-form solution, mesh-refinement studies

from dataclasses import replace
from typing import Iterable, Tuple

import numpy as np
import pandas as pd
from tqdm import tqdm

from .basis import LagrangeBasis
from .elements import element_length
from .logs import logger
from .mesh import IntervalMesh
from .model import BarProblem
from .quadrature import GaussQuadrature


def interpolate_at_quadrature(
    coords: np.ndarray,
    nodal_values: np.ndarray,
    basis: LagrangeBasis,
    quad: GaussQuadrature,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Interpolate x and u_h at the quadrature points of one element.

    Parameters:
    -----------
    coords : np.ndarray
        Nodal x-coordinates of the element, local node order
    nodal_values : np.ndarray
        Solution values at the same nodes
    basis, quad : LagrangeBasis, GaussQuadrature
        The same objects used during assembly

    Returns:
    --------
    x_q, u_q : np.ndarray
        Shape (n_qp,) each
    """
    N = basis.values(quad.points)
    x_q = np.asarray(coords, dtype=float) @ N
    u_q = np.asarray(nodal_values, dtype=float) @ N
    return x_q, u_q


def l2_norm_of_error(
    mesh: IntervalMesh,
    solution: np.ndarray,
    problem: BarProblem,
    basis: LagrangeBasis,
    quad: GaussQuadrature,
) -> float:
    """
    ||u_h - u_exact||_L2 over [0, L].

    For each element and quadrature point:
        x_q   = Σ_B x_B N_B(ξ_q)
        u_h   = Σ_B D_B N_B(ξ_q)
        total += (u_h - u_exact(x_q))² (h_e/2) w_q
    Returns sqrt(total). Reads its inputs only.
    """
    solution = np.asarray(solution, dtype=float)
    if solution.shape != (mesh.n_dofs,):
        raise ValueError(f"Solution has shape {solution.shape}, expected ({mesh.n_dofs},).")

    total = 0.0
    for dofs, coords in mesh:
        h_e = element_length(coords)
        x_q, u_h = interpolate_at_quadrature(coords, solution[dofs], basis, quad)
        u_exact = problem.exact_solution(x_q)
        total += float(np.sum((u_h - u_exact) ** 2 * h_e / 2.0 * quad.weights))
    return float(np.sqrt(total))


def estimate_rate(h, errors) -> float:
    """Least-squares slope of log(error) against log(h)."""
    h = np.asarray(h, dtype=float)
    errors = np.asarray(errors, dtype=float)
    if len(h) < 2:
        raise ValueError("Need at least two refinements to estimate a rate.")
    slope, _ = np.polyfit(np.log(h), np.log(errors), 1)
    return float(slope)


def convergence_study(
    base: BarProblem,
    element_counts: Iterable[int],
    quad_points: int = 3,
    show_progress: bool = False,
    boundary_rtol: float = 1e-12,
) -> pd.DataFrame:
    """
    Solve the same problem on a sequence of meshes.

    Returns:
    --------
    pd.DataFrame
        Columns: n_elements, h, n_dofs, l2_error, rate.
        `rate` is log(e_{k-1}/e_k) / log(h_{k-1}/h_k), NaN on the first row.
        For order p the expected rate is p + 1.
    """
    # local import: analysis imports this module
    from .analysis import BarAnalysis
    from .config import SolverConfig

    config = SolverConfig(quad_points=quad_points, boundary_rtol=boundary_rtol)
    counts = list(element_counts)
    iterator = tqdm(counts, desc=f"Order {base.order}") if show_progress else counts

    rows = []
    for n in iterator:
        problem = replace(base, n_elements=n)
        result = BarAnalysis(problem, config).run()
        rows.append({
            'n_elements': n,
            'h': problem.length / n,
            'n_dofs': len(result.solution),
            'l2_error': result.l2_error,
        })
        logger.info("order=%d n_elements=%d l2_error=%.6e", base.order, n, result.l2_error)

    df = pd.DataFrame(rows)
    rate = np.log(df['l2_error'].shift(1) / df['l2_error']) / np.log(df['h'].shift(1) / df['h'])
    df['rate'] = rate
    return df


def expected_rate(order: int) -> int:
    """Optimal L2 convergence order for a degree-p Lagrange basis."""
    return order + 1
