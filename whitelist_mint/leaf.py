"""Leaf hashing for whitelist entries.

A leaf commits to one ``(address, allowance)`` row of the whitelist table::

    keccak256(abi.encodePacked(address, allowance.toString()))

i.e. the 20 raw address bytes followed by the allowance as decimal ASCII,
with no padding and no length prefix.  The token contract recomputes the same
value from ``msg.sender`` and the claimed allowance, so any change here breaks
every published proof.
"""
from web3 import Web3

from .addresses import AddressLike, address_bytes, normalize


def _allowance_str(allowance: int) -> str:
    if isinstance(allowance, bool) or not isinstance(allowance, int):
        raise ValueError(f"allowance must be an integer, got: {allowance!r}")
    if allowance < 0:
        raise ValueError(f"allowance must be non-negative, got: {allowance}")
    return str(allowance)


def encode_whitelist_entry(address: AddressLike, allowance: int) -> bytes:
    """Return the hash pre-image for ``(address, allowance)``."""
    return address_bytes(address) + _allowance_str(allowance).encode("ascii")


def hash_whitelist_entry(address: AddressLike, allowance: int) -> bytes:
    """Match MyToken.whitelistMint leaf: keccak256(abi.encodePacked(msg.sender, allowance.toString()))."""
    return bytes(
        Web3.solidity_keccak(
            ["address", "string"],
            [normalize(address), _allowance_str(allowance)],
        )
    )
