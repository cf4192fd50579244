"""Deterministic identity derivation.

Every pool, LP mint, pool-owned token account, owner token account and user
position has an identity derived from a fixed set of domain-separating labels,
so clients can locate records without an index lookup.

Identities are 20-byte hex strings ("0x" + 40 lowercase hex chars) taken from
sha256 over the length-prefixed labels.
"""

import hashlib
from collections.abc import Sequence

# Namespace mixed into every derivation
PROGRAM_NAMESPACE = "equilibrium-core"


def normalize_address(address: str) -> str:
    """Normalize an identity to lowercase."""
    return address.lower()


def derive_address(*labels: str) -> str:
    """Derive a stable identity from labels.

    Labels are length-prefixed so ("ab", "c") and ("a", "bc") never collide.
    """
    digest = hashlib.sha256()
    for label in (PROGRAM_NAMESPACE, *labels):
        encoded = normalize_address(label).encode()
        digest.update(len(encoded).to_bytes(4, "big"))
        digest.update(encoded)
    return "0x" + digest.hexdigest()[:40]


def config_address(authority: str) -> str:
    return derive_address("amm-config", authority)


def seed_pool_address(mints: Sequence[str]) -> str:
    return derive_address("pool", "seed", *mints)


def growth_pool_address(seed_pool_id: str, partner_mint: str) -> str:
    return derive_address("pool", "growth", seed_pool_id, partner_mint)


def lp_mint_address(pool_id: str) -> str:
    return derive_address("lp-mint", pool_id)


def pool_token_address(pool_id: str, mint: str) -> str:
    return derive_address("pool-token", pool_id, mint)


def token_account_address(owner: str, mint: str) -> str:
    """Associated token account of an owner for a mint."""
    return derive_address("token-account", owner, mint)


def user_position_address(owner: str, pool_id: str) -> str:
    return derive_address("user-position", owner, pool_id)
