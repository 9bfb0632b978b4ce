from typing import Union

import base58
from eth_utils import is_hex_address, to_checksum_address

from .config import TRON_ADDRESS_PREFIX

AddressLike = Union[str, bytes]


def tron_to_evm_address(tron_addr: str) -> str:
    """
    Convert Tron Base58Check addr (T...) to EVM 0x address by stripping leading 0x41.
    Returns checksummed 0x address.
    """
    try:
        decoded = base58.b58decode_check(tron_addr)
    except ValueError as exc:
        raise ValueError(f"Invalid Tron address: {tron_addr}") from exc
    if len(decoded) != 21 or decoded[0] != TRON_ADDRESS_PREFIX:
        raise ValueError(f"Invalid Tron address: {tron_addr}")
    return to_checksum_address("0x" + decoded[1:].hex())


def normalize(addr: AddressLike) -> str:
    """Return the checksummed 0x form of ``addr``.

    Accepts a 0x hex string in any case (the prefix may be omitted), a TRON
    base58check string, or the raw 20 address bytes.
    """
    if isinstance(addr, (bytes, bytearray)):
        if len(addr) != 20:
            raise ValueError(f"Invalid address: expected 20 bytes, got {len(addr)}")
        return to_checksum_address("0x" + bytes(addr).hex())
    if not isinstance(addr, str):
        raise ValueError(f"Invalid address: {addr!r}")

    addr = addr.strip()
    if addr.startswith("T") and len(addr) == 34:
        return tron_to_evm_address(addr)
    if not addr.startswith("0x"):
        addr = "0x" + addr
    if not is_hex_address(addr):
        raise ValueError(f"Invalid address: {addr}")
    return to_checksum_address(addr)


def address_bytes(addr: AddressLike) -> bytes:
    """Return the canonical 20-byte form of ``addr``."""
    return bytes.fromhex(normalize(addr)[2:])
