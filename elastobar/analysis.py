# elastobar/analysis.py
"""
ANALYSIS: One Solve From Mesh to Error Norm
===========================================

PIPELINE:
---------
    generate_mesh()      uniform mesh, connectivity + coordinate tables
    setup_system()       Dirichlet map, global system, quadrature, basis
    assemble_system()    element loop, scatter-add, constraints
    solve()              sparse direct solve -> D
    l2_norm_of_error()   ||u_h - u_exact|| with the same basis/quadrature

Each step checks that the previous one ran; run() does all of them.

USAGE:
------
    problem = BarProblem(order=2, variant=1, n_elements=10)
    result = BarAnalysis(problem).run()
    result.l2_error
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from .assembly import assemble_system
from .basis import LagrangeBasis
from .config import SolverConfig, CONFIG
from .kernel.assemble import GlobalSystem, CONSTRAINED
from .kernel.dof import DirichletMap
from .kernel.solve import solve_sparse, residual_norm
from .logs import logger
from .mesh import IntervalMesh
from .model import BarProblem
from .post import l2_norm_of_error
from .quadrature import GaussQuadrature


@dataclass(frozen=True, eq=False)
class AnalysisResult:
    """Outcome of a full run."""
    problem: BarProblem
    mesh: IntervalMesh
    solution: np.ndarray
    l2_error: float
    residual: float


class BarAnalysis:
    """
    Finite element analysis of one BarProblem.

    Parameters:
    -----------
    problem : BarProblem
        Validated problem data (variant, order, element count, constants)
    config : SolverConfig
        Numerical settings (quadrature size, boundary tolerance)
    """

    def __init__(self, problem: BarProblem, config: SolverConfig = CONFIG):
        self.problem = problem
        self.config = config

        self.mesh: Optional[IntervalMesh] = None
        self.basis: Optional[LagrangeBasis] = None
        self.quad: Optional[GaussQuadrature] = None
        self.constraints: Optional[DirichletMap] = None
        self.system: Optional[GlobalSystem] = None
        self.solution: Optional[np.ndarray] = None

    def generate_mesh(self) -> IntervalMesh:
        p = self.problem
        self.mesh = IntervalMesh.uniform(p.length, p.n_elements, p.order)
        return self.mesh

    def setup_system(self) -> None:
        if self.mesh is None:
            self.generate_mesh()
        self.basis = LagrangeBasis(self.problem.order)
        self.quad = GaussQuadrature(self.config.quad_points)
        self.constraints = DirichletMap.for_problem(
            self.problem, self.mesh.node_location, self.config.boundary_rtol
        )
        self.system = GlobalSystem(self.mesh.n_dofs)

        logger.info("Number of active elems:       %d", self.mesh.n_elements)
        logger.info("Number of degrees of freedom: %d", self.mesh.n_dofs)

    def assemble_system(self) -> GlobalSystem:
        if self.system is None:
            raise RuntimeError("setup_system() must run before assemble_system().")
        return assemble_system(
            self.mesh, self.problem, self.basis, self.quad,
            constraints=self.constraints,
            system=self.system,
            boundary_rtol=self.config.boundary_rtol,
        )

    def solve(self) -> np.ndarray:
        if self.system is None or self.system.state != CONSTRAINED:
            raise RuntimeError("assemble_system() must run before solve().")
        self.solution = solve_sparse(self.system.stiffness, self.system.load)
        return self.solution

    def l2_norm_of_error(self) -> float:
        if self.solution is None:
            raise RuntimeError("solve() must run before l2_norm_of_error().")
        return l2_norm_of_error(self.mesh, self.solution, self.problem, self.basis, self.quad)

    def run(self) -> AnalysisResult:
        self.generate_mesh()
        self.setup_system()
        self.assemble_system()
        self.solve()
        err = self.l2_norm_of_error()
        res = residual_norm(self.system.stiffness, self.solution, self.system.load)
        logger.info("order=%d variant=%d L2 error=%.6e residual=%.2e",
                    self.problem.order, int(self.problem.variant), err, res)
        return AnalysisResult(self.problem, self.mesh, self.solution, err, res)

    def nodal_table(self) -> pd.DataFrame:
        """Nodal x, u_h and u_exact, sorted by x."""
        if self.solution is None:
            raise RuntimeError("solve() must run before nodal_table().")
        x = self.mesh.node_location
        df = pd.DataFrame({
            'dof': np.arange(self.mesh.n_dofs),
            'x': x,
            'u': self.solution,
            'u_exact': self.problem.exact_solution(x),
        })
        return df.sort_values('x').reset_index(drop=True)
