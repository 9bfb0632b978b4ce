from .addresses import normalize, tron_to_evm_address
from .controller import MintReceipt, Phase, TokenLedger, WhitelistMintController
from .errors import (
    EmptyInputError,
    ExceedsAllowance,
    InvalidFunds,
    InvalidProof,
    LeafNotFoundError,
    WhitelistError,
)
from .leaf import encode_whitelist_entry, hash_whitelist_entry
from .merkle import MerkleTree, hash_pair, verify_proof
from .whitelist import Whitelist, load_whitelist

__all__ = [
    "normalize",
    "tron_to_evm_address",
    "encode_whitelist_entry",
    "hash_whitelist_entry",
    "MerkleTree",
    "hash_pair",
    "verify_proof",
    "Whitelist",
    "load_whitelist",
    "Phase",
    "MintReceipt",
    "TokenLedger",
    "WhitelistMintController",
    "WhitelistError",
    "InvalidProof",
    "ExceedsAllowance",
    "InvalidFunds",
    "EmptyInputError",
    "LeafNotFoundError",
]
