#!/usr/bin/env python3

# Repair-rate benchmark:
# random payload -> RS encode -> corrupt exactly e distinct bytes -> RS decode -> tally

# examples:
#   python -m rscodec.model.bench --errors 0:20:1 --trials 1000
#   python -m rscodec.model.bench --n 26 --k 10 --payload qr --errors 7 --trials 100000
#   python -m rscodec.model.bench --errors 14:18 --save rs255 --plot

# Notes:
# - "miscorrected" counts blocks reported CLEAN/REPAIRED whose data bytes differ from the original
# - for e <= t every block must come back REPAIRED; past t most blocks are UNCORRECTABLE

import argparse
import csv
import sys
import time
from typing import List, Optional, Sequence

import numpy as np

from rscodec.model.codec import RSCfg, decode, get_encoder
from rscodec.model.decoder import DecodeStatus
from rscodec.model.errors import InvalidParameterError
from rscodec.model.helpers import corrupt_bytes
from rscodec.model.qr_payload import ALPHANUMERIC, pack_alphanumeric

PAYLOADS = ("random", "qr")
QR_CHARS = 8


def _parse_value_list(spec: str, label: str) -> List[int]:
    """Parse comma/range based CLI specs (e.g., '0:20:2' or '14,16,17')."""
    if not spec:
        return []
    spec = spec.strip()
    values: List[int] = []
    if ":" in spec:
        parts = [p.strip() for p in spec.split(":")]
        if len(parts) not in (2, 3):
            raise ValueError(f"{label}: expected start:stop[:step]")
        start = int(parts[0])
        stop = int(parts[1])
        step = int(parts[2]) if len(parts) == 3 else 1
        if step <= 0:
            raise ValueError(f"{label}: step must be > 0 (got {step})")
        # stop is inclusive
        values = list(range(start, stop + 1, step))
    else:
        for token in spec.split(","):
            token = token.strip()
            if token:
                values.append(int(token))

    if not values:
        raise ValueError(f"{label}: no values parsed from '{spec}'")
    return values


def _make_payload(kind: str, k: int, rng: np.random.Generator) -> bytes:
    if kind == "qr":
        text = "".join(ALPHANUMERIC[i] for i in rng.integers(0, len(ALPHANUMERIC), size=QR_CHARS))
        return pack_alphanumeric(text, k)
    return rng.integers(0, 256, size=k, dtype=np.uint8).tobytes()


def run_trials(
    cfg: RSCfg,
    errors: int,
    trials: int,
    rng: np.random.Generator,
    payload: str = "random",
) -> dict:
    if not 0 <= errors <= cfg.n:
        raise ValueError(f"error count must be in [0, {cfg.n}] (got {errors})")

    encoder = get_encoder(cfg.nsym)
    counts = {"clean": 0, "repaired": 0, "uncorrectable": 0, "miscorrected": 0}
    start = time.perf_counter()
    for _ in range(trials):
        data = _make_payload(payload, cfg.k, rng)
        codeword = encoder.encode(data)
        received, _ = corrupt_bytes(codeword, errors, rng)
        status = decode(received, cfg.nsym)
        if status is DecodeStatus.UNCORRECTABLE:
            counts["uncorrectable"] += 1
        elif bytes(received[:cfg.k]) != data:
            counts["miscorrected"] += 1
        elif status is DecodeStatus.CLEAN:
            counts["clean"] += 1
        else:
            counts["repaired"] += 1
    elapsed = time.perf_counter() - start

    recovered = counts["clean"] + counts["repaired"]
    return {
        "n": cfg.n,
        "k": cfg.k,
        "t": cfg.t,
        "errors": errors,
        "trials": trials,
        **counts,
        "recovery_rate": recovered / trials if trials else 0.0,
        "elapsed_s": elapsed,
    }


def run_sweep(
    cfg: RSCfg,
    error_counts: Sequence[int],
    trials: int,
    seed: Optional[int] = None,
    payload: str = "random",
) -> List[dict]:
    rng = np.random.default_rng(seed)
    return [run_trials(cfg, e, trials, rng, payload) for e in error_counts]


def _print_summary(results: Sequence[dict]) -> None:
    if not results:
        return
    first = results[0]
    print(f"\nRS({first['n']},{first['k']}) repair-rate summary (t = {first['t']}):")
    print("  errors\ttrials\tclean\trepaired\tuncorr\tmiscorr\trecovery\ttime[s]")
    for row in results:
        print(
            f"  {row['errors']:>6d}\t{row['trials']}\t{row['clean']}\t{row['repaired']:>8d}\t"
            f"{row['uncorrectable']}\t{row['miscorrected']}\t{row['recovery_rate']:>8.4f}\t{row['elapsed_s']:.2f}"
        )


FIELDNAMES = [
    "n",
    "k",
    "t",
    "errors",
    "trials",
    "clean",
    "repaired",
    "uncorrectable",
    "miscorrected",
    "recovery_rate",
    "elapsed_s",
]


def write_csv(results: Sequence[dict], prefix: str) -> str:
    csv_path = f"{prefix}_repair.csv"
    with open(csv_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for row in results:
            writer.writerow({key: row.get(key, "") for key in FIELDNAMES})
    return csv_path


def plot_results(results: Sequence[dict], prefix: str) -> str:
    import matplotlib.pyplot as plt

    errors = [r["errors"] for r in results]
    rates = [r["recovery_rate"] for r in results]
    uncorr = [r["uncorrectable"] / r["trials"] if r["trials"] else 0.0 for r in results]
    miscorr = [r["miscorrected"] / r["trials"] if r["trials"] else 0.0 for r in results]

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(errors, rates, marker="o", linewidth=1.5, label="recovered")
    ax.plot(errors, uncorr, marker="s", linestyle="--", label="uncorrectable")
    ax.plot(errors, miscorr, marker="x", linestyle=":", label="miscorrected")
    ax.axvline(results[0]["t"], color="grey", alpha=0.5, label=f"t = {results[0]['t']}")
    ax.set_xlabel("Byte errors per codeword")
    ax.set_ylabel("Fraction of trials")
    ax.set_title(f"RS({results[0]['n']},{results[0]['k']}) repair rate")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()

    png_path = f"{prefix}_repair.png"
    fig.savefig(png_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return png_path


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Measure Reed-Solomon repair rates under random byte corruption.")
    p.add_argument("--n", type=int, default=255, help="Codeword length in bytes (default: 255)")
    p.add_argument("--k", type=int, default=223, help="Data bytes per codeword (default: 223)")
    p.add_argument("--errors", default="0:20",
                   help="Error counts to test (format: 'start:stop[:step]' or comma list, default: 0:20)")
    p.add_argument("--trials", type=int, default=1000, help="Trials per error count (default: 1000)")
    p.add_argument("--seed", type=int, default=None, help="Seed for the numpy RNG")
    p.add_argument("--payload", choices=PAYLOADS, default="random",
                   help="Payload generator: random bytes or a packed alphanumeric segment")
    p.add_argument("--save", metavar="PREFIX", help="Write results to PREFIX_repair.csv")
    p.add_argument("--plot", action="store_true", help="With --save, also write PREFIX_repair.png")
    return p


def main(argv: Optional[list] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    try:
        cfg = RSCfg(n=args.n, k=args.k)
        error_counts = _parse_value_list(args.errors, "--errors")
    except (InvalidParameterError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    if args.trials <= 0:
        print("Error: --trials must be > 0", file=sys.stderr)
        return 2

    print(f"[info] RS({cfg.n},{cfg.k}) nsym={cfg.nsym} t={cfg.t} payload={args.payload} seed={args.seed}")
    try:
        results = run_sweep(cfg, error_counts, args.trials, seed=args.seed, payload=args.payload)
    except (InvalidParameterError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    _print_summary(results)

    if args.save:
        print(f"\nSaved repair-rate data -> {write_csv(results, args.save)}")
        if args.plot:
            try:
                print(f"Saved repair-rate plot -> {plot_results(results, args.save)}")
            except ImportError as e:
                print(f"\nWarning: plotting unavailable - {e}", file=sys.stderr)
    elif args.plot:
        print("Warning: --plot needs --save PREFIX", file=sys.stderr)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
