#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
benchmark.py
------------
Sweep random grids (sizes × densities × seeds), route start -> goal with the
Lee planner and check each answer against the scipy reachability oracle.

Writes one CSV row per grid:
    env_id,H,W,density,seed,success,oracle,hops,manhattan,turns,visited,time_s

Example:
    python -m cli.benchmark --sizes 16x16,32x32 --densities 0.1,0.3 \
        --num-envs 20 --seed 0 --outdir results/csv
"""

from __future__ import annotations
import argparse
import csv
import logging
import os
import sys
import time
from typing import List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from envs.generator import generate_environment, has_path
from eval.metrics import manhattan, path_metrics, validate_path
from planners import get_planner

log = logging.getLogger(__name__)

FIELDS = [
    "env_id", "H", "W", "density", "seed", "success", "oracle",
    "hops", "manhattan", "turns", "visited", "time_s",
]


def _parse_sizes(s: str) -> List[Tuple[int, int]]:
    sizes: List[Tuple[int, int]] = []
    for token in s.split(","):
        token = token.strip().lower()
        if "x" not in token:
            raise ValueError(f"Bad size '{token}', expected like 30x30")
        h, w = token.split("x")
        sizes.append((int(h), int(w)))
    return sizes


def _parse_densities(s: str) -> List[float]:
    vals = []
    for token in s.split(","):
        token = token.strip()
        if token.endswith("%"):
            vals.append(float(token[:-1]) / 100.0)
        else:
            vals.append(float(token))
    return vals


def run_case(planner, H: int, W: int, density: float, seed: int) -> dict:
    rng = np.random.default_rng(seed)
    env = generate_environment(H=H, W=W, density=density, rng=rng)

    t0 = time.perf_counter()
    res = planner.plan(env.grid, env.start, env.goal)
    elapsed = time.perf_counter() - t0

    oracle = has_path(env.grid, env.start, env.goal, env.blank)
    if res['success'] != oracle:
        log.warning("planner/oracle disagree on %dx%d d=%.2f seed=%d: planner=%s oracle=%s",
                    H, W, density, seed, res['success'], oracle)
    if res['success']:
        problems = validate_path(env.grid, res['path'], env.blank)
        if problems:
            log.warning("invalid path (seed=%d): %s", seed, "; ".join(problems))
        m = path_metrics(res['path'])
    else:
        m = {'hops': "", 'turns': ""}

    return {
        "H": H, "W": W, "density": density, "seed": seed,
        "success": int(res['success']), "oracle": int(oracle),
        "hops": m['hops'], "manhattan": manhattan(env.start, env.goal),
        "turns": m['turns'], "visited": res['visited'], "time_s": round(elapsed, 6),
    }


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Lee planner sweep with oracle cross-check.")
    ap.add_argument("--sizes", type=str, default="16x16,32x32", help="Comma list of HxW")
    ap.add_argument("--densities", type=str, default="0.10,0.25,0.40", help="Comma list (0–1 or %%)")
    ap.add_argument("--num-envs", type=int, default=10, help="Grids per (size, density)")
    ap.add_argument("--seed", type=int, default=0, help="Base RNG seed")
    ap.add_argument("--outdir", type=str, default="results/csv", help="Output directory")
    ap.add_argument("--log-level", type=str, default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        sizes = _parse_sizes(args.sizes)
        densities = _parse_densities(args.densities)
    except ValueError as e:
        ap.error(str(e))

    planner = get_planner("lee", blank=0)

    os.makedirs(args.outdir, exist_ok=True)
    stamp = time.strftime("%Y%m%d_%H%M%S")
    out_csv = os.path.join(args.outdir, f"lee_benchmark_s{args.seed}_{stamp}.csv")
    tmp_csv = out_csv + f".tmp_{os.getpid()}"

    total = len(sizes) * len(densities) * args.num_envs
    mismatches = 0
    with open(tmp_csv, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()
        env_id = 0
        with tqdm(total=total, desc="Grids") as pbar:
            for H, W in sizes:
                for density in densities:
                    for _ in range(args.num_envs):
                        seed = (args.seed * 1_000_003 + env_id * 97 + H * 11 + W * 13) % 2**32
                        row = run_case(planner, H, W, density, seed)
                        env_id += 1
                        row["env_id"] = env_id
                        mismatches += int(row["success"] != row["oracle"])
                        w.writerow(row)
                        pbar.update(1)

    # Atomic rename to final path
    os.replace(tmp_csv, out_csv)
    print(f"[OK] Wrote: {out_csv}")
    if mismatches:
        print(f"[WARN] {mismatches} planner/oracle mismatches", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
