#!/usr/bin/env python3

# Golden model runner:
#   encode: input -> zero pad to k bytes -> RS(n, k) encoder -> output codeword
#   decode: codeword -> RS(n, k) decoder (in place) -> status + repaired data

# examples:
#   python -m rscodec.model.pipeline encode --text "HELLO WORLD"
#   python -m rscodec.model.pipeline encode --hex "0011223344" --n 26 --k 10 --out cw.bin
#   python -m rscodec.model.pipeline decode --infile cw.bin --n 26 --k 10

# Notes:
# - one block per run, input longer than k bytes is rejected
# - decode input must be exactly n bytes

import argparse
import sys
from typing import Optional

from rscodec.model.codec import RSCfg, decode_block, encode_block
from rscodec.model.decoder import DecodeStatus
from rscodec.model.errors import InvalidParameterError
from rscodec.model.helpers import byte_error_count, hex_dump, pad_to_block


def _read_input(args: argparse.Namespace) -> bytes:
    if args.text is not None:
        return args.text.encode("utf-8")
    if args.hex is not None:
        s = args.hex.replace(" ", "").replace("\n", "")
        try:
            return bytes.fromhex(s)
        except ValueError:
            print("Error: --hex contains non-hex characters.", file=sys.stderr)
            sys.exit(2)
    if args.infile is not None:
        with open(args.infile, "rb") as f:
            return f.read()
    # Fallback: read from stdin as text
    data = sys.stdin.read()
    if not data:
        print("No input provided. Use --text/--hex/--infile or pipe data via stdin.", file=sys.stderr)
        sys.exit(2)
    return data.encode("utf-8")


def _print_stage(label: str, data: bytes) -> None:
    print(f"{label} (size = {len(data)}) =")
    print(hex_dump(data))
    print()


def _write_out(path: Optional[str], data: bytes) -> None:
    if path:
        with open(path, "wb") as f:
            f.write(data)


def run_encode(args: argparse.Namespace, cfg: RSCfg) -> int:
    data = _read_input(args)
    if len(data) > cfg.k:
        print(f"Error: input is {len(data)} bytes, RS({cfg.n},{cfg.k}) carries at most {cfg.k}.", file=sys.stderr)
        return 2

    padded = pad_to_block(data, cfg.k) if data else bytes(cfg.k)
    codeword = encode_block(padded, cfg)

    _print_stage("input", data)
    _print_stage(f"RS({cfg.n},{cfg.k}) output", codeword)
    _write_out(args.out, codeword)
    return 0


def run_decode(args: argparse.Namespace, cfg: RSCfg) -> int:
    received = _read_input(args)
    if len(received) != cfg.n:
        print(f"Error: codeword is {len(received)} bytes, RS({cfg.n},{cfg.k}) expects {cfg.n}.", file=sys.stderr)
        return 2

    buffer = bytearray(received)
    status = decode_block(buffer, cfg)

    _print_stage("received", received)
    print(f"status = {status.value}")
    if status is DecodeStatus.REPAIRED:
        print(f"corrected bytes = {byte_error_count(received, buffer)}")
    print()
    _print_stage("data", bytes(buffer[:cfg.k]))
    null_char = chr(0)
    restored_text = bytes(buffer[:cfg.k]).decode("utf-8", errors="replace").replace(null_char, "")
    print(f"restored ascii = '{restored_text}'")

    _write_out(args.out, bytes(buffer[:cfg.k]))
    if status is DecodeStatus.UNCORRECTABLE:
        print("\nWarning: block is uncorrectable; data bytes are left as received.", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run the RS(n,k) golden model on one block.")
    p.add_argument("mode", choices=["encode", "decode"], help="Direction to run")
    src = p.add_mutually_exclusive_group()
    src.add_argument("--text", help="UTF-8 text input.")
    src.add_argument("--hex", help="Hex string input (spaces allowed).")
    src.add_argument("--infile", help="Binary input file.")
    p.add_argument("--n", type=int, default=255, help="Codeword length in bytes (default: 255)")
    p.add_argument("--k", type=int, default=223, help="Data bytes per codeword (default: 223)")
    p.add_argument("--out", help="Write the codeword (encode) or repaired data (decode) to this file.")
    return p


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = RSCfg(n=args.n, k=args.k)
    except InvalidParameterError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if args.mode == "encode":
        return run_encode(args, cfg)
    return run_decode(args, cfg)


if __name__ == "__main__":
    raise SystemExit(main())
