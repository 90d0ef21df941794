"""
Mesh-refinement study: L2 error against element size for orders 1-3.

Halving h should divide the error by about 2^(p+1). Order 3 reproduces
the cubic exact solution, so its error sits at round-off level.
"""

import argparse
import os

import matplotlib.pyplot as plt
import pandas as pd

from elastobar import BarProblem, CONFIG, convergence_study
from elastobar.logs import set_level, use_tqdm_handler
from elastobar.post import estimate_rate, expected_rate


def main():
    parser = argparse.ArgumentParser(description='L2 error convergence study')
    parser.add_argument('--problem', type=int, default=1,
                        help='1 = Dirichlet/Dirichlet, 2 = Dirichlet/Neumann (default: 1)')
    parser.add_argument('--levels', type=int, default=5,
                        help='Number of meshes, starting at 4 elements and doubling (default: 5)')
    args = parser.parse_args()

    use_tqdm_handler()
    set_level("INFO")

    counts = [4 * 2**k for k in range(args.levels)]
    frames = []
    for order in (1, 2, 3):
        base = BarProblem.from_config(CONFIG, order=order, variant=args.problem)
        df = convergence_study(base, counts, quad_points=CONFIG.quad_points, show_progress=True)
        df.insert(0, 'order', order)
        frames.append(df)
    results = pd.concat(frames, ignore_index=True)

    print("=" * 60)
    print(f"Convergence study, problem {args.problem}")
    print("=" * 60)
    print(results.to_string(index=False, float_format=lambda v: f"{v:.4e}"))
    print()
    for order, df in results.groupby('order'):
        slope = estimate_rate(df['h'], df['l2_error'])
        print(f"  order {order}: fitted rate {slope:.3f} (expected {expected_rate(order)})")

    os.makedirs("artifacts", exist_ok=True)
    csv_path = f"artifacts/convergence_problem{args.problem}.csv"
    results.to_csv(csv_path, index=False)
    print(f"\nSaved {csv_path}")

    plt.figure(figsize=(8, 6))
    for order, df in results.groupby('order'):
        plt.loglog(df['h'], df['l2_error'], 'o-', label=f'order {order}')
        if order < 3:
            h = df['h'].to_numpy()
            ref = df['l2_error'].iloc[0] * (h / h[0]) ** expected_rate(order)
            plt.loglog(h, ref, 'k--', alpha=0.4, linewidth=1)
    plt.xlabel('element size h (m)')
    plt.ylabel(r'$\|u_h - u\|_{L^2}$')
    plt.title(f'L2 error convergence, problem {args.problem}')
    plt.grid(True, which='both', alpha=0.3)
    plt.legend()
    plt.tight_layout()

    png_path = f"artifacts/convergence_problem{args.problem}.png"
    plt.savefig(png_path, dpi=150)
    plt.close()
    print(f"Saved {png_path}")


if __name__ == "__main__":
    main()
