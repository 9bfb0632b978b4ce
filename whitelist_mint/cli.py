import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import DEFAULT_EXPORT_FILE, DEFAULT_WHITELIST_FILE, LOG_FORMAT
from .errors import WhitelistError
from .leaf import hash_whitelist_entry
from .merkle import verify_proof
from .whitelist import Whitelist, load_whitelist, save_json, solidity_proof_lines


def _load(args: argparse.Namespace) -> Whitelist:
    return load_whitelist(args.whitelist, sort_leaves=not args.keep_order)


def cmd_root(args: argparse.Namespace) -> None:
    wl = _load(args)
    print(f"Merkle Root: {wl.hex_root}")


def cmd_proof(args: argparse.Namespace) -> None:
    wl = _load(args)
    entry = wl.entry(args.address)
    proof = wl.hex_proof_for(entry.address)
    ok = verify_proof(proof, entry.leaf, wl.root)
    print(f"Address {entry.address} is whitelisted: {ok}")
    print(f"Allowance: {entry.allowance}")
    print("Proof:", "[" + ", ".join(proof) + "]")
    if args.solidity:
        print("\n// Solidity")
        for line in solidity_proof_lines(entry.address, proof):
            print(line)


def cmd_verify(args: argparse.Namespace) -> None:
    leaf = hash_whitelist_entry(args.address, args.allowance)
    proof = json.loads(args.proof) if args.proof else []
    ok = verify_proof(proof, leaf, args.root)
    print(f"Leaf: 0x{leaf.hex()}")
    print(f"Valid: {ok}")
    if not ok:
        raise SystemExit(1)


def cmd_export(args: argparse.Namespace) -> None:
    wl = _load(args)
    path = save_json(wl, args.out)
    print(f"Merkle Root: {wl.hex_root}")
    print(f"Saved: {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="whitelist-mint", description="Whitelist Merkle root and proof tooling")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_table_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--whitelist", default=DEFAULT_WHITELIST_FILE, help="address -> allowance table (.json or .csv)")
        p.add_argument(
            "--keep-order",
            action="store_true",
            help="Keep table order for leaves instead of sorting them",
        )

    p_root = sub.add_parser("root", help="Print the Merkle root of a whitelist table")
    add_table_args(p_root)
    p_root.set_defaults(func=cmd_root)

    p_proof = sub.add_parser("proof", help="Print the proof for one address")
    add_table_args(p_proof)
    p_proof.add_argument("address")
    p_proof.add_argument("--solidity", action="store_true", help="Also print bytes32[] assignments")
    p_proof.set_defaults(func=cmd_proof)

    p_verify = sub.add_parser("verify", help="Check a proof against a root without the table")
    p_verify.add_argument("address")
    p_verify.add_argument("allowance", type=int)
    p_verify.add_argument("root", help="0x-prefixed 32-byte root")
    p_verify.add_argument("--proof", help='JSON list of 0x hashes, e.g. \'["0xab..", "0xcd.."]\'')
    p_verify.set_defaults(func=cmd_verify)

    p_export = sub.add_parser("export", help="Write root, leaves and every proof to JSON")
    add_table_args(p_export)
    p_export.add_argument("--out", default=DEFAULT_EXPORT_FILE)
    p_export.set_defaults(func=cmd_export)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format=LOG_FORMAT)
    try:
        args.func(args)
    except (WhitelistError, ValueError, OSError) as exc:
        raise SystemExit(f"error: {exc}") from exc


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main(sys.argv[1:])
