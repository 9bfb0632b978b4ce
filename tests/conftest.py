import pytest

from whitelist_mint import TokenLedger, Whitelist, WhitelistMintController

# Default Hardhat signer addresses; the first ten are the accounts the token
# tests mint from.
HARDHAT_ADDRESSES = [
    "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266",
    "0x70997970c51812dc3a010c7d01b50e0d17dc79c8",
    "0x3c44cdddb6a900fa2b585dd299e03d12fa4293bc",
    "0x90f79bf6eb2c4f870365e785982e1f101e93b906",
    "0x15d34aaf54267db7d7c367839aaf71a00a2c6a65",
    "0x9965507d1a55bcc2695c58ba16fb37d819b0a4dc",
    "0x976ea74026e726554db657fa54763abd0c3a0aa9",
    "0x14dc79964da2c08b23698b3d3cc7ca32193d9955",
    "0x23618e81e3f5cdf7f54c3d65f7fbc0abf5b21e8f",
    "0xa0ee7a142d267c1f36714e4a8f75612f20a79720",
]

UNIT_PRICE = 10 ** 16


@pytest.fixture
def addresses() -> list:
    return list(HARDHAT_ADDRESSES)


@pytest.fixture
def table() -> dict:
    """Whitelist table shaped like the contract's ``tokens.json``."""
    return {
        HARDHAT_ADDRESSES[1]: 3,
        HARDHAT_ADDRESSES[2]: 5,
        HARDHAT_ADDRESSES[3]: 1,
        HARDHAT_ADDRESSES[4]: 2,
        HARDHAT_ADDRESSES[5]: 10,
    }


@pytest.fixture
def whitelist(table) -> Whitelist:
    return Whitelist(table)


@pytest.fixture
def ledger() -> TokenLedger:
    return TokenLedger()


@pytest.fixture
def controller(ledger) -> WhitelistMintController:
    return WhitelistMintController(unit_price=UNIT_PRICE, issue=ledger)


@pytest.fixture
def open_controller(controller, whitelist) -> WhitelistMintController:
    controller.set_root(whitelist.root)
    return controller
