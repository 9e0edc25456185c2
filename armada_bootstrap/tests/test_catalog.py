import pytest

from armada_bootstrap.core.constants.contracts import DEFAULT_UPGRADES
from armada_bootstrap.core.types import UpgradeDefinition
from armada_bootstrap.deploy.catalog import seed_catalog
from armada_bootstrap.testing.ledger import FakeLedger


class FlakyLedger(FakeLedger):
    """Drops the connection on the n-th addUpgrade."""

    def __init__(self, registry, *, fail_on: int):
        super().__init__(registry)
        self.fail_on = fail_on
        self.attempts = 0

    async def submit(self, contract, method, args=(), *, signer):
        if method == "addUpgrade":
            self.attempts += 1
            if self.attempts == self.fail_on:
                raise ConnectionError("connection reset by peer")
        return await super().submit(contract, method, args, signer=signer)


@pytest.mark.asyncio
async def test_seeds_every_upgrade(ledger, primary_account):
    outcomes = await seed_catalog(ledger, primary_account)

    assert len(outcomes) == len(DEFAULT_UPGRADES) == 8
    assert all(ok for _, (ok, _detail) in outcomes)
    assert ledger.upgrades == [tuple(u.as_args()) for u in DEFAULT_UPGRADES]
    assert all(c.contract == "MantleArmada" for c in ledger.calls())


@pytest.mark.asyncio
async def test_rejected_item_does_not_stop_the_rest(ledger, primary_account):
    ledger.revert_on(
        "MantleArmada",
        "addUpgrade",
        "Upgrade exists",
        when=lambda call: call.args[0] == "Cannon Battery",
    )

    outcomes = await seed_catalog(ledger, primary_account)

    failed = [(u.name, detail) for u, (ok, detail) in outcomes if not ok]
    assert failed == [("Cannon Battery", "Upgrade exists")]
    assert len(ledger.upgrades) == 7
    assert [u.name for u, _ in outcomes] == [u.name for u in DEFAULT_UPGRADES]


@pytest.mark.asyncio
async def test_custom_catalog(ledger, primary_account):
    upgrade = UpgradeDefinition("Figurehead", 50, speed_bonus=1)

    ((seeded, (ok, tx_hash)),) = await seed_catalog(ledger, primary_account, [upgrade])

    assert seeded is upgrade
    assert ok
    assert tx_hash.startswith("0x")
    assert ledger.upgrades == [("Figurehead", 50, 0, 0, 1, 0, 0, 0)]


@pytest.mark.asyncio
async def test_transport_error_does_not_stop_the_rest(ledger, primary_account):
    flaky = FlakyLedger(ledger.registry, fail_on=2)

    outcomes = await seed_catalog(flaky, primary_account)

    assert len(outcomes) == len(DEFAULT_UPGRADES)
    failed = [(u.name, detail) for u, (ok, detail) in outcomes if not ok]
    assert failed == [(DEFAULT_UPGRADES[1].name, "connection reset by peer")]
    assert flaky.upgrades == [
        tuple(u.as_args()) for i, u in enumerate(DEFAULT_UPGRADES) if i != 1
    ]
