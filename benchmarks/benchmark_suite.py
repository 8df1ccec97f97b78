"""
Projection Benchmark Suite

Performance testing for the incompressibility solver.
Compares the per-cell reference sweep with the Numba kernel.
"""

import numpy as np
import time
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from macfluid.constants import DEFAULT_DENSITY, DEFAULT_GRAVITY, DEFAULT_ITERATIONS
from macfluid.grid import Grid


def make_grid(nx, ny, cell_width=0.01, seed=0):
    """Grid with random interior velocities after one gravity step."""
    rng = np.random.default_rng(seed)
    grid = Grid(nx, ny, cell_width)
    for it in grid.inside_index_iter():
        grid.cell(it.index).velocity.back[:] = rng.normal(0.0, 0.1, size=2)
    grid.integrate(1.0 / 60.0, DEFAULT_GRAVITY)
    return grid


def benchmark_solver(solve, nx, ny, iterations, num_steps, warmup_steps=1):
    """
    Benchmark one projection implementation.

    Returns
    -------
    mcups : float
        Million Cell Updates Per Second (one update = one cell, one sweep)
    """
    dt = 1.0 / 60.0
    grid = make_grid(nx, ny)

    # Warmup (includes Numba compilation)
    for _ in range(warmup_steps):
        solve(grid, dt, iterations, DEFAULT_DENSITY)

    # Timed run
    start = time.perf_counter()
    for _ in range(num_steps):
        grid.integrate(dt, DEFAULT_GRAVITY)
        solve(grid, dt, iterations, DEFAULT_DENSITY)
    elapsed = time.perf_counter() - start

    mcups = num_steps * iterations * nx * ny / elapsed / 1e6
    return mcups


def run_full_benchmark(grid_sizes=None, iterations=DEFAULT_ITERATIONS, num_steps=5):
    """
    Run benchmark comparing reference and Numba projection.
    """
    from macfluid.kernels import solve_incompressibility_fast
    from macfluid.solver import solve_incompressibility

    if grid_sizes is None:
        grid_sizes = [
            (16, 16),
            (32, 32),
            (64, 64),
            (128, 128),
        ]

    print("=" * 60)
    print("Projection Benchmark Suite")
    print("=" * 60)
    print(f"Iterations: {iterations}")
    print(f"Steps: {num_steps}")
    print()

    results = {'reference': {}, 'numba': {}}

    print("Benchmarking reference (per-cell)...")
    print("-" * 40)
    for nx, ny in grid_sizes:
        if nx * ny > 64 * 64:
            results['reference'][(nx, ny)] = 0.0
            print(f"  {nx:4d} x {ny:4d}: skipped")
            continue
        mcups = benchmark_solver(solve_incompressibility, nx, ny, iterations, num_steps)
        results['reference'][(nx, ny)] = mcups
        print(f"  {nx:4d} x {ny:4d}: {mcups:8.3f} MCUPS")
    print()

    print("Benchmarking Numba kernel...")
    print("-" * 40)
    for nx, ny in grid_sizes:
        mcups = benchmark_solver(solve_incompressibility_fast, nx, ny, iterations, num_steps)
        results['numba'][(nx, ny)] = mcups
        print(f"  {nx:4d} x {ny:4d}: {mcups:8.3f} MCUPS")
    print()

    # Summary Table
    print("=" * 60)
    print("SUMMARY: Performance Comparison (MCUPS)")
    print("=" * 60)
    print(f"{'Grid':<12} {'Reference':>12} {'Numba':>12} {'Speedup':>10}")
    print("-" * 60)

    for nx, ny in grid_sizes:
        ref = results['reference'].get((nx, ny), 0)
        fast = results['numba'].get((nx, ny), 0)
        speedup = f"{fast / ref:.0f}x" if ref > 0 else "N/A"
        print(f"{nx:4d}x{ny:<4d}    {ref:>12.3f} {fast:>12.3f} {speedup:>10}")

    print("=" * 60)

    return results


if __name__ == "__main__":
    run_full_benchmark()
