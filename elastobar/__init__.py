# elastobar - 1D elastostatic bar by Lagrange finite elements
"""
ELASTOBAR: Finite Elements for a Bar Under Body Load
====================================================

Solves  E u'' + f x = 0  on (0, L) with Lagrange elements of order 1-3.

ARCHITECTURE:
-------------
    config.py       SolverConfig defaults (CONFIG)
    model.py        BarProblem, ProblemVariant, exact solution
    basis.py        Lagrange basis and derivatives on [-1, 1]
    quadrature.py   Gauss-Legendre rule
    mesh.py         Uniform interval mesh, DOF numbering
    elements.py     Local stiffness / load by quadrature
    assembly.py     Element loop and scatter into the global system
    post.py         L2 error norm, convergence studies
    analysis.py     BarAnalysis pipeline driver
    kernel/         Dirichlet map, sparse global system, sparse solve
"""

from .config import SolverConfig, CONFIG
from .model import BarProblem, ProblemVariant, ConfigurationError
from .basis import LagrangeBasis, reference_coordinate, basis_value, basis_gradient
from .quadrature import GaussQuadrature, QuadratureError
from .mesh import IntervalMesh
from .elements import DegenerateElementError
from .kernel import DirichletMap, GlobalSystem, solve_sparse, SingularSystemError
from .assembly import assemble_system
from .post import l2_norm_of_error, convergence_study
from .analysis import BarAnalysis, AnalysisResult

__version__ = "0.1.0"
