"""Whitelist phase of the token sale.

The controller holds the only mutable whitelist state: the published root,
the terminal "ended" flag and how many tokens each address has minted so far.
Token issuance itself is delegated to the ``issue`` callable supplied by the
token layer.
"""
import logging
import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, List, Sequence

from .addresses import AddressLike, normalize
from .config import ZERO_ROOT
from .errors import ExceedsAllowance, InvalidFunds, InvalidProof
from .leaf import hash_whitelist_entry
from .merkle import HashLike, to_bytes32, verify_proof

IssueFn = Callable[[str, int], None]


def _check_root(root: HashLike) -> bytes:
    try:
        return to_bytes32(root)
    except ValueError as exc:
        raise ValueError(f"root must be 32 bytes: {exc}") from exc


class Phase(IntEnum):
    CLOSED = 0
    OPEN = 1
    ENDED = 2


@dataclass(frozen=True)
class MintReceipt:
    address: str
    count: int
    payment: int
    total_minted: int


class WhitelistMintController:
    def __init__(self, unit_price: int, issue: IssueFn, root: HashLike = ZERO_ROOT) -> None:
        if isinstance(unit_price, bool) or not isinstance(unit_price, int) or unit_price < 0:
            raise ValueError(f"unit_price must be a non-negative integer, got: {unit_price!r}")
        self.unit_price = unit_price
        self._issue = issue
        self._root = _check_root(root)
        self._ended = False
        self._minted: Dict[str, int] = {}
        self._lock = threading.Lock()
        self.logger = logging.getLogger(self.__class__.__name__)

    # --- ADMIN ---

    def set_root(self, root: HashLike) -> None:
        root = _check_root(root)
        with self._lock:
            self._root = root
        self.logger.info("Whitelist root set to 0x%s", root.hex())

    def end_phase(self) -> None:
        with self._lock:
            self._ended = True
        self.logger.info("Whitelist phase ended")

    # --- VIEWS ---

    @property
    def root(self) -> bytes:
        return self._root

    @property
    def phase(self) -> Phase:
        if self._ended:
            return Phase.ENDED
        if self._root == ZERO_ROOT:
            return Phase.CLOSED
        return Phase.OPEN

    def minted(self, address: AddressLike) -> int:
        return self._minted.get(normalize(address), 0)

    # --- MINT ---

    def whitelist_mint(
        self,
        caller: AddressLike,
        count: int,
        allowance: int,
        proof: Sequence[HashLike],
        payment: int,
    ) -> MintReceipt:
        """Mint ``count`` tokens to ``caller`` against its whitelist allowance.

        Checks run in a fixed order and stop at the first failure:
        phase open and proof valid (:class:`InvalidProof`), cumulative count
        within ``allowance`` (:class:`ExceedsAllowance`), then
        ``payment == count * unit_price`` (:class:`InvalidFunds`).  Nothing
        changes unless every check passes and ``issue`` succeeds.
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValueError(f"count must be a positive integer, got: {count!r}")
        caller = normalize(caller)
        # Malformed allowance raises ValueError in every phase.
        leaf = hash_whitelist_entry(caller, allowance)

        with self._lock:
            if self.phase != Phase.OPEN:
                self.logger.debug("Rejected %s: whitelist phase %s", caller, self.phase.name)
                raise InvalidProof()

            if not verify_proof(proof, leaf, self._root):
                self.logger.debug("Rejected %s: proof does not match root", caller)
                raise InvalidProof()

            prior = self._minted.get(caller, 0)
            if prior + count > allowance:
                self.logger.debug(
                    "Rejected %s: %d already minted, %d requested, allowance %d",
                    caller, prior, count, allowance,
                )
                raise ExceedsAllowance()

            if payment != count * self.unit_price:
                self.logger.debug(
                    "Rejected %s: paid %s, expected %d", caller, payment, count * self.unit_price
                )
                raise InvalidFunds()

            self._minted[caller] = prior + count
            try:
                self._issue(caller, count)
            except Exception:
                self._minted[caller] = prior
                raise

        self.logger.info("Minted %d to %s (%d/%d)", count, caller, prior + count, allowance)
        return MintReceipt(address=caller, count=count, payment=payment, total_minted=prior + count)


class TokenLedger:
    """Minimal stand-in for the token contract's balance bookkeeping.

    Usable as the ``issue`` hook of :class:`WhitelistMintController` for local
    simulation; a real deployment hands in its own issuance hook instead.
    """

    def __init__(self) -> None:
        self.balances: Dict[str, int] = {}
        self.history: List[tuple] = []

    def __call__(self, address: AddressLike, count: int) -> None:
        address = normalize(address)
        self.balances[address] = self.balances.get(address, 0) + count
        self.history.append((address, count))

    def balance_of(self, address: AddressLike) -> int:
        return self.balances.get(normalize(address), 0)

    @property
    def total_supply(self) -> int:
        return sum(self.balances.values())
