"""Configuration constants for whitelist tree generation and minting."""

# Root value reported by the minting contract before the operator sets one.
ZERO_ROOT = b"\x00" * 32

# Leading byte of a decoded TRON base58check address (mainnet and testnets).
TRON_ADDRESS_PREFIX = 0x41

# Whitelist table consumed by the CLI when no path is given.  Same shape as
# the ``tokens.json`` shipped next to the token contract: ``{address: allowance}``.
DEFAULT_WHITELIST_FILE = "tokens.json"

# Output of ``whitelist-mint export``.
DEFAULT_EXPORT_FILE = "whitelist_data.json"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
