#!/usr/bin/env python3
"""
Parameter sweep for the traffic pathfinding simulation.

Runs run_headless() across combinations of algorithm and seed,
reports search metrics, and optionally writes CSV output.

Usage:
    python sweep.py
    python sweep.py --algorithms astar,bfs --seeds 1,2,3 --frames 1200
    python sweep.py --csv results.csv --parallel
"""
import argparse
import csv
import multiprocessing

from traffic_pathfinding import Algorithm, run_headless


def _run_single(args):
    """Wrapper for multiprocessing: unpack args and call run_headless."""
    algorithm, seed, frames, steps = args
    return run_headless(
        algorithm=algorithm,
        frames=frames,
        seed=seed,
        search_steps_per_frame=steps,
    )


def main():
    parser = argparse.ArgumentParser(description="Traffic pathfinding parameter sweep")
    parser.add_argument("--frames", type=int, default=1800,
                        help="Frames per run at 60 fps (default: 1800 = 30 s)")
    parser.add_argument("--algorithms", type=str,
                        default=",".join(a.value for a in Algorithm),
                        help="Comma-separated list of algorithms to sweep")
    parser.add_argument("--seeds", type=str, default="1,2,3,4,5",
                        help="Comma-separated list of RNG seeds")
    parser.add_argument("--steps-per-frame", type=int, default=None,
                        help="Cells a search expands per frame (default: unlimited)")
    parser.add_argument("--csv", type=str, default=None,
                        help="Optional CSV output file path")
    parser.add_argument("--parallel", action="store_true",
                        help="Run sweep using multiprocessing")
    parser.add_argument("--workers", type=int, default=None,
                        help="Number of parallel workers (default: cpu_count, capped at 8)")
    args = parser.parse_args()

    algorithms = [Algorithm.parse(x.strip()).value for x in args.algorithms.split(",")]
    seeds = [int(x.strip()) for x in args.seeds.split(",")]
    combos = [(a, s, args.frames, args.steps_per_frame) for a in algorithms for s in seeds]
    total = len(combos)

    print(f"Sweep: {len(algorithms)} algorithms x {len(seeds)} seeds = {total} runs")
    print(f"Frames: {args.frames}, steps/frame: {args.steps_per_frame or 'unlimited'}")
    if args.parallel:
        n_workers = args.workers or min(multiprocessing.cpu_count(), 8)
        print(f"Mode: parallel ({n_workers} workers)")
    else:
        print("Mode: serial")
    print()

    results = []

    if args.parallel:
        n_workers = args.workers or min(multiprocessing.cpu_count(), 8)
        with multiprocessing.Pool(processes=n_workers) as pool:
            for i, result in enumerate(pool.imap_unordered(_run_single, combos), 1):
                results.append(result)
                print(f"  [{i}/{total}] {result['algorithm']:>8}  seed={result['seed']:>3}  "
                      f"Searches={result['recalculations']:>3}  "
                      f"Wall={result['wall_clock_seconds']:.1f}s")
    else:
        for i, combo in enumerate(combos, 1):
            algorithm, seed, _, _ = combo
            print(f"  [{i}/{total}] {algorithm}, seed={seed} ...", end="", flush=True)
            result = _run_single(combo)
            results.append(result)
            print(f"  Searches={result['recalculations']:>3}  "
                  f"Wall={result['wall_clock_seconds']:.1f}s")

    results.sort(key=lambda r: (r["algorithm"], r["seed"]))

    print()
    header = f"{'Algo':>8}  {'Seed':>4}  {'Cars':>4}  {'Runs':>4}  {'NoRoute':>7}  " \
             f"{'Explored':>9}  {'PathLen':>8}  {'Time(ms)':>9}"
    print(header)
    print("-" * len(header))
    for r in results:
        print(f"{r['algorithm']:>8}  {r['seed']:>4}  {r['num_cars']:>4}  "
              f"{r['recalculations']:>4}  {r['no_route']:>7}  "
              f"{r['avg_nodes_explored']:>9.1f}  "
              f"{r['avg_path_length']:>8.1f}  "
              f"{r['avg_execution_time'] * 1000:>9.2f}")

    # Per-algorithm averages
    print()
    for algorithm in algorithms:
        rows = [r for r in results if r["algorithm"] == algorithm]
        if rows:
            avg = sum(r["avg_nodes_explored"] for r in rows) / len(rows)
            print(f"{algorithm:>8}: {avg:.1f} nodes explored per search on average")

    if args.csv:
        fieldnames = [
            "algorithm", "seed", "num_cars", "frames", "recalculations", "no_route",
            "avg_nodes_explored", "avg_path_length", "avg_execution_time",
            "cars_held", "wall_clock_seconds",
        ]
        with open(args.csv, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for r in results:
                writer.writerow({k: r[k] for k in fieldnames})
        print(f"\nCSV written to: {args.csv}")


if __name__ == "__main__":
    main()
