from __future__ import annotations

from eth_account import Account
from eth_account.signers.local import LocalAccount

from armada_bootstrap.core.errors import ConfigurationError


def account_from_key(private_key: str, *, label: str = "private key") -> LocalAccount:
    key = str(private_key).strip()
    if not key:
        raise ConfigurationError(f"{label} is empty")
    if not key.startswith("0x"):
        key = f"0x{key}"
    try:
        return Account.from_key(key)
    except (ValueError, TypeError) as exc:
        # Never echo the key material itself.
        raise ConfigurationError(f"{label} is not a valid secp256k1 key") from exc

