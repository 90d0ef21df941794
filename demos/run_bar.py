"""
BAR UNDER BODY LOAD: SINGLE SOLVE
=================================

Solves  E u'' + f x = 0  on (0, L) for one basis order and one problem
variant, prints the mesh size, the boundary values and the L2 error, and
writes the nodal solution to a CSV file.

    variant 1:  u(0) = g1, u(L) = g2
    variant 2:  u(0) = g1, E u'(L) = h

EXAMPLE USAGE:
--------------
    python demos/run_bar.py --order 2 --problem 1 --elements 10
    python demos/run_bar.py --order 3 --problem 2 --out artifacts/bar_p3.csv -v
"""

import argparse
import os

from elastobar import BarAnalysis, BarProblem, CONFIG
from elastobar.logs import set_level


def main():
    parser = argparse.ArgumentParser(
        description='Solve the 1D bar problem with Lagrange finite elements',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python demos/run_bar.py --order 1 --problem 1
  python demos/run_bar.py --order 3 --problem 2 --elements 20

This will generate:
  - artifacts/bar_order<p>_problem<v>.csv (nodal x, u, u_exact)
        """
    )
    parser.add_argument('--order', type=int, default=CONFIG.order,
                        help=f'Basis function order, 1-3 (default: {CONFIG.order})')
    parser.add_argument('--problem', type=int, default=CONFIG.variant,
                        help=f'1 = Dirichlet/Dirichlet, 2 = Dirichlet/Neumann (default: {CONFIG.variant})')
    parser.add_argument('--elements', type=int, default=CONFIG.n_elements,
                        help=f'Number of elements (default: {CONFIG.n_elements})')
    parser.add_argument('--out', type=str, default=None,
                        help='CSV output path (default: artifacts/bar_order<p>_problem<v>.csv)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log progress at INFO level')
    args = parser.parse_args()

    set_level("INFO" if args.verbose else CONFIG.log_level)

    problem = BarProblem.from_config(
        CONFIG, order=args.order, variant=args.problem, n_elements=args.elements
    )
    analysis = BarAnalysis(problem)
    result = analysis.run()

    print("=" * 60)
    print(f"Bar problem {int(problem.variant)}, order {problem.order}")
    print("=" * 60)
    print(f"  Number of active elems:       {result.mesh.n_elements}")
    print(f"  Number of degrees of freedom: {result.mesh.n_dofs}")

    table = analysis.nodal_table()
    print(f"  u(0) = {table['u'].iloc[0]:.6e}")
    print(f"  u(L) = {table['u'].iloc[-1]:.6e}   (exact {table['u_exact'].iloc[-1]:.6e})")
    print(f"  L2 error:          {result.l2_error:.6e}")
    print(f"  Relative residual: {result.residual:.2e}")

    out = args.out or os.path.join(
        "artifacts", f"bar_order{problem.order}_problem{int(problem.variant)}.csv"
    )
    os.makedirs(os.path.dirname(out) or ".", exist_ok=True)
    table.to_csv(out, index=False)
    print(f"\nSaved {out}")


if __name__ == "__main__":
    main()
