from typing import Union


class WhitelistError(Exception):
    """Base class for whitelist tree and minting failures."""


class InvalidProof(WhitelistError):
    """Proof does not authenticate the caller, or the whitelist phase is not open."""

    def __init__(self, message: str = "Invalid Merkle Tree proof supplied.") -> None:
        super().__init__(message)


class ExceedsAllowance(WhitelistError):
    def __init__(self, message: str = "Exceeds whitelist supply.") -> None:
        super().__init__(message)


class InvalidFunds(WhitelistError):
    def __init__(self, message: str = "Invalid funds provided.") -> None:
        super().__init__(message)


class EmptyInputError(WhitelistError):
    def __init__(self, message: str = "at least one leaf required") -> None:
        super().__init__(message)


class LeafNotFoundError(WhitelistError):
    """Leaf (or whitelisted address) is absent from the tree."""

    def __init__(self, leaf: Union[bytes, str]) -> None:
        self.leaf = leaf
        if isinstance(leaf, bytes):
            leaf = "0x" + leaf.hex()
        super().__init__(f"Not in tree: {leaf}")
