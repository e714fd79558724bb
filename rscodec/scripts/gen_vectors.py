#!/usr/bin/env python3
# rscodec/scripts/gen_vectors.py
# generate RS(n,k) encoder reference vectors from the golden model
# text format for humans and diffing, binary format for fast loading
#
# python -m rscodec.scripts.gen_vectors --out-dir vectors --num-random 20

import argparse
import random
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from rscodec.model.codec import RSCfg, default_rs_cfg, encode_block
from rscodec.model.errors import InvalidParameterError

Vector = Tuple[str, bytes, bytes]


def bytes_to_hex_string(data: bytes) -> str:
    return " ".join(f"{b:02X}" for b in data)


def build_vectors(cfg: RSCfg = default_rs_cfg, num_random: int = 10, seed: int = 0x52535F5645435F) -> List[Vector]:
    k = cfg.k
    patterns = [
        ("all_zeros", bytes([0] * k)),
        ("all_ones", bytes([0xFF] * k)),
        ("pattern_aa", bytes([0xAA] * k)),
        ("pattern_55", bytes([0x55] * k)),
        ("impulse_start", bytes([0x80] + [0] * (k - 1))),
        ("impulse_end", bytes([0] * (k - 1) + [0x01])),
        ("counter", bytes([i % 256 for i in range(k)])),
        ("reverse_counter", bytes([(255 - i) % 256 for i in range(k)])),
    ]

    # seeded so the files are reproducible ("RS_VEC_" in ASCII-ish)
    rnd = random.Random(seed)
    for i in range(num_random):
        patterns.append((f"random_{i:02d}", bytes(rnd.randint(0, 255) for _ in range(k))))

    return [(name, msg, encode_block(msg, cfg)) for name, msg in patterns]


def write_vectors(vectors: List[Vector], output_file: Path, cfg: RSCfg = default_rs_cfg) -> Path:
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with output_file.open("w", encoding="utf-8") as f:
        f.write(f"// RS({cfg.n},{cfg.k}) Encoder Test Vectors\n")
        f.write("// Generated from golden model (rscodec.model.encoder)\n")
        f.write(f"// Format: test_name | input_message ({cfg.k} bytes) | expected_codeword ({cfg.n} bytes)\n")
        f.write("// Each byte in hex, space-separated\n")
        f.write("//\n")
        f.write(f"// Total test vectors: {len(vectors)}\n")
        f.write("//\n\n")

        for name, msg, cw in vectors:
            f.write(f"// Test: {name}\n")
            f.write(f"MSG: {bytes_to_hex_string(msg)}\n")
            f.write(f"CW:  {bytes_to_hex_string(cw)}\n")
            f.write("\n")

    # header: number of vectors (4 bytes LE), then message + codeword per vector
    bin_file = output_file.with_suffix(".bin")
    with bin_file.open("wb") as f:
        f.write(len(vectors).to_bytes(4, "little"))
        for _, msg, cw in vectors:
            f.write(msg)
            f.write(cw)
    return bin_file


def read_binary_vectors(bin_file: Path, cfg: RSCfg = default_rs_cfg) -> List[Tuple[bytes, bytes]]:
    raw = Path(bin_file).read_bytes()
    count = int.from_bytes(raw[:4], "little")
    record = cfg.k + cfg.n
    if len(raw) != 4 + count * record:
        raise ValueError(f"{bin_file}: expected {count} records of {record} bytes")
    out = []
    for i in range(count):
        off = 4 + i * record
        out.append((raw[off:off + cfg.k], raw[off + cfg.k:off + record]))
    return out


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Generate RS encoder reference vectors from the golden model")
    p.add_argument("--n", type=int, default=255, help="Codeword length (default: 255)")
    p.add_argument("--k", type=int, default=223, help="Data bytes per codeword (default: 223)")
    p.add_argument("--num-random", type=int, default=20, help="Number of seeded random vectors")
    p.add_argument("--out-dir", default="vectors", help="Destination directory for generated files")
    return p


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = RSCfg(n=args.n, k=args.k)
    except InvalidParameterError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    print("RS Encoder Test Vector Generator")
    print("=" * 50)

    output_file = Path(args.out_dir) / f"rs{cfg.n}_{cfg.k}_vectors.txt"
    vectors = build_vectors(cfg, num_random=args.num_random)
    bin_file = write_vectors(vectors, output_file, cfg)

    print(f"Generated {len(vectors)} test vectors")
    print(f"Written to: {output_file}")
    print(f"Binary format: {bin_file}")
    print("\nTest vector summary:")
    print(f"  Input size:  {cfg.k} bytes (k={cfg.k})")
    print(f"  Output size: {cfg.n} bytes (n={cfg.n})")
    print(f"  Parity bytes: {cfg.nsym} bytes")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
