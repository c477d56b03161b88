# scripts/count_table.py
from __future__ import annotations

import argparse
import csv
import json
import pathlib
import sys
import time
from datetime import datetime, timezone

# 允许用 “python scripts/count_table.py” 直接运行：
# 把项目根目录加入 sys.path，避免 import bounded_primes 失败
PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np
import pandas as pd
from tqdm import tqdm

from bounded_primes.enumerator import count_prime_sets, count_smooth
from bounded_primes.metrics import mertens
from bounded_primes.sieve import build_prime_pool

COLUMNS = ["bound", "squarefree", "smooth", "mertens"]


def positive_int(val: str) -> int:
    iv = int(val)
    if iv <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return iv


def _ensure_parent(path: pathlib.Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def build_rows(bounds: list[int], y: int | None, verbose: bool) -> list[dict]:
    pool = build_prime_pool(max(bounds), verbose=verbose)
    smooth_pool = pool.restricted(y) if y is not None else pool
    rows = []
    for b in tqdm(bounds, desc="bounds", disable=not verbose):
        rows.append({
            "bound": b,
            "squarefree": count_prime_sets(b, pool),
            "smooth": count_smooth(b, smooth_pool),
            "mertens": mertens(b, pool),
        })
    return rows


def _save_csv(path: pathlib.Path, rows: list[dict]) -> None:
    _ensure_parent(path)
    with path.open("w", encoding="utf-8", newline="") as f:
        w = csv.DictWriter(f, fieldnames=COLUMNS)
        w.writeheader()
        w.writerows(rows)


def _save_npy(path: pathlib.Path, rows: list[dict]) -> None:
    _ensure_parent(path)
    np.save(str(path), np.array([[r[c] for c in COLUMNS] for r in rows], dtype=np.int64))


def _save_parquet(path: pathlib.Path, rows: list[dict]) -> bool:
    _ensure_parent(path)
    try:
        pd.DataFrame(rows, columns=COLUMNS).to_parquet(path, index=False)
        return True
    except (ImportError, ValueError) as e:
        print(f"[warn] Failed to save Parquet ({e}); skip.")
        return False


def _save_meta_json(path: pathlib.Path, args: argparse.Namespace, rows: list[dict], elapsed: float) -> None:
    _ensure_parent(path)
    meta = {
        "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "params": {"start": args.start, "stop": args.stop, "step": args.step, "y": args.y},
        "summary": {"rows": len(rows), "elapsed_s": round(elapsed, 3)},
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(meta, f, ensure_ascii=False, indent=2)


def _save_plot(path: pathlib.Path, rows: list[dict]) -> None:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    _ensure_parent(path)
    xs = [r["bound"] for r in rows]
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(10, 4))
    ax1.plot(xs, [r["squarefree"] for r in rows], marker="o", label="squarefree")
    ax1.plot(xs, [r["smooth"] for r in rows], marker="s", label="smooth")
    ax1.set_xlabel("bound")
    ax1.set_ylabel("count below bound")
    ax1.legend()
    ax2.step(xs, [r["mertens"] for r in rows], where="post")
    ax2.axhline(0, color="k", linewidth=0.5)
    ax2.set_xlabel("bound")
    ax2.set_ylabel("M(bound - 1)")
    fig.tight_layout()
    fig.savefig(path, dpi=160)
    plt.close(fig)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Tabulate squarefree counts, smooth counts and Mertens values over a range of bounds"
    )
    parser.add_argument("--start", type=positive_int, default=10, help="First bound")
    parser.add_argument("--stop", type=positive_int, default=1000, help="Last bound (inclusive)")
    parser.add_argument("--step", type=positive_int, default=10, help="Bound increment")
    parser.add_argument(
        "-y", type=positive_int, default=None,
        help="Smoothness parameter: count only y-smooth numbers (default: all primes)",
    )
    parser.add_argument("--verbose", action="store_true", help="Print progress")
    parser.add_argument(
        "--out-prefix",
        type=str,
        default=None,
        help="Path prefix for outputs (will create: *.csv, *.npy, *_meta.json).",
    )
    parser.add_argument(
        "--out-parquet",
        action="store_true",
        help="Additionally save the table to Parquet (requires pandas + pyarrow/fastparquet).",
    )
    parser.add_argument("--plot", action="store_true", help="Additionally save a PNG plot (matplotlib).")
    args = parser.parse_args()

    bounds = list(range(args.start, args.stop + 1, args.step))
    if not bounds:
        parser.error("empty bound range")

    print(f"Running bounds={args.start}..{args.stop} step={args.step}  y={args.y}")
    t0 = time.perf_counter()
    rows = build_rows(bounds, args.y, args.verbose)
    t1 = time.perf_counter()

    for r in rows:
        print(f"{r['bound']:>10}  {r['squarefree']:>10}  {r['smooth']:>10}  {r['mertens']:>6}")
    print(f"elapsed        : {t1 - t0:.2f}s")

    prefix = args.out_prefix
    if prefix is None and (args.out_parquet or args.plot):
        prefix = f"runs/counts_{args.start}_{args.stop}_{int(time.time())}"
        print(f"[info] --out-prefix not set; using default: {prefix}")

    if prefix:
        base = pathlib.Path(prefix)
        csv_path = base.with_name(base.name + ".csv")
        npy_path = base.with_name(base.name + ".npy")
        meta_path = base.with_name(base.name + "_meta.json")
        _save_csv(csv_path, rows)
        print(f"[saved] {csv_path}")
        _save_npy(npy_path, rows)
        print(f"[saved] {npy_path}")
        _save_meta_json(meta_path, args, rows, t1 - t0)
        print(f"[saved] {meta_path}")

        if args.out_parquet:
            parquet_path = base.with_name(base.name + ".parquet")
            if _save_parquet(parquet_path, rows):
                print(f"[saved] {parquet_path}")
        if args.plot:
            png_path = base.with_name(base.name + ".png")
            _save_plot(png_path, rows)
            print(f"[saved] {png_path}")


if __name__ == "__main__":
    main()
