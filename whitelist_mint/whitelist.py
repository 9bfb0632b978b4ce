"""Whitelist tables and the tree published for them.

A table maps each address to its allowance.  :class:`Whitelist` hashes every
row, builds the tree and hands out the per-address proofs that are
distributed to buyers alongside the published root.
"""
import csv
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from .addresses import AddressLike, normalize
from .errors import LeafNotFoundError
from .leaf import hash_whitelist_entry
from .merkle import MerkleTree

logger = logging.getLogger(__name__)

Rows = Union[Mapping[str, int], Iterable[Tuple[AddressLike, int]]]


@dataclass
class WhitelistEntry:
    address: str
    allowance: int
    leaf: bytes


def _parse_allowance(raw: Any, address: str) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"allowance for {address} must be an integer, got: {raw!r}")
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw.isdigit():
            raise ValueError(f"allowance for {address} must be a non-negative integer, got: {raw!r}")
        return int(raw)
    if not isinstance(raw, int) or raw < 0:
        raise ValueError(f"allowance for {address} must be a non-negative integer, got: {raw!r}")
    return raw


class Whitelist:
    def __init__(self, rows: Rows, sort_leaves: bool = True):
        items = rows.items() if isinstance(rows, Mapping) else rows
        self.entries: Dict[str, WhitelistEntry] = {}
        for addr, raw in items:
            address = normalize(addr)
            if address in self.entries:
                raise ValueError(f"Duplicate address: {address}")
            allowance = _parse_allowance(raw, address)
            self.entries[address] = WhitelistEntry(
                address=address,
                allowance=allowance,
                leaf=hash_whitelist_entry(address, allowance),
            )
        self.tree = MerkleTree([e.leaf for e in self.entries.values()], sort_leaves=sort_leaves)
        logger.info("Whitelist of %d addresses, root %s", len(self.entries), self.hex_root)

    @property
    def root(self) -> bytes:
        return self.tree.get_root()

    @property
    def hex_root(self) -> str:
        return self.tree.get_hex_root()

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, address: AddressLike) -> bool:
        return normalize(address) in self.entries

    def entry(self, address: AddressLike) -> WhitelistEntry:
        address = normalize(address)
        try:
            return self.entries[address]
        except KeyError:
            raise LeafNotFoundError(address) from None

    def allowance(self, address: AddressLike) -> int:
        return self.entry(address).allowance

    def proof_for(self, address: AddressLike) -> List[bytes]:
        return self.tree.get_proof(self.entry(address).leaf)

    def hex_proof_for(self, address: AddressLike) -> List[str]:
        return ["0x" + p.hex() for p in self.proof_for(address)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "merkleRoot": self.hex_root,
            "count": len(self.entries),
            "entries": [
                {
                    "address": e.address,
                    "allowance": e.allowance,
                    "leaf": "0x" + e.leaf.hex(),
                    "proof": self.hex_proof_for(e.address),
                }
                for e in self.entries.values()
            ],
        }


# --- LOADING ---

def load_table(path: str) -> List[Tuple[str, int]]:
    """Read a whitelist table from ``path``.

    ``.csv`` files need an ``address,allowance`` header; anything else is read
    as a JSON object ``{address: allowance}`` like the contract's ``tokens.json``.
    """
    rows: List[Tuple[str, int]] = []
    if path.lower().endswith(".csv"):
        with open(path, newline="", encoding="utf-8") as f:
            rdr = csv.DictReader(f)
            if not rdr.fieldnames or "address" not in rdr.fieldnames or "allowance" not in rdr.fieldnames:
                raise ValueError("CSV needs header: address,allowance")
            for r in rdr:
                a = (r.get("address") or "").strip()
                v = (r.get("allowance") or "").strip()
                if a:
                    rows.append((a, _parse_allowance(v, a)))
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object of address -> allowance")
        for a, v in data.items():
            rows.append((a, _parse_allowance(v, a)))
    logger.debug("Loaded %d rows from %s", len(rows), path)
    return rows


def load_whitelist(path: str, sort_leaves: bool = True) -> Whitelist:
    return Whitelist(load_table(path), sort_leaves=sort_leaves)


def save_json(whitelist: Whitelist, filename: str) -> str:
    path = os.path.abspath(filename)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(whitelist.to_dict(), f, indent=2)
    logger.info("Saved whitelist data to %s", path)
    return path


# --- SOLIDITY ---

def solidity_proof_lines(address: AddressLike, proof: List[str]) -> List[str]:
    """Render ``proof`` as ``bytes32[]`` assignments for a Foundry test or script."""
    name = normalize(address).replace("0x", "").upper()
    lines = [f"PROOF_{name} = new bytes32[]({len(proof)});"]
    for i, p in enumerate(proof):
        lines.append(f"PROOF_{name}[{i}] = {p};")
    return lines
