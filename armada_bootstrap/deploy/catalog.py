from __future__ import annotations

from collections.abc import Sequence

from eth_account.signers.local import LocalAccount
from loguru import logger

from armada_bootstrap.core.clients.RemoteCallClient import RemoteCallClient
from armada_bootstrap.core.constants.contracts import DEFAULT_UPGRADES, MANTLE_ARMADA
from armada_bootstrap.core.errors import CallRevertedError
from armada_bootstrap.core.types import StatusTuple, UpgradeDefinition

SeedOutcome = tuple[UpgradeDefinition, StatusTuple]


async def seed_catalog(
    client: RemoteCallClient,
    signer: LocalAccount,
    upgrades: Sequence[UpgradeDefinition] = DEFAULT_UPGRADES,
) -> list[SeedOutcome]:
    """Add each upgrade to the game contract, best effort.

    A rejected item is logged and reported; it never stops the rest.
    """
    log = logger.bind(phase="catalog")
    outcomes: list[SeedOutcome] = []
    for upgrade in upgrades:
        try:
            receipt = await client.submit(
                MANTLE_ARMADA, "addUpgrade", upgrade.as_args(), signer=signer
            )
        except CallRevertedError as exc:
            log.warning(f"Upgrade {upgrade.name!r} not added: {exc.reason}")
            outcomes.append((upgrade, (False, exc.reason)))
            continue
        except Exception as exc:
            log.error(f"Upgrade {upgrade.name!r} not added: {exc}")
            outcomes.append((upgrade, (False, str(exc))))
            continue
        log.info(f"Added upgrade {upgrade.name!r} (cost {upgrade.cost})")
        outcomes.append((upgrade, (True, receipt.tx_hash)))

    added = sum(1 for _, (ok, _msg) in outcomes if ok)
    log.info(f"Catalog seeding finished: {added}/{len(outcomes)} upgrades added")
    return outcomes
