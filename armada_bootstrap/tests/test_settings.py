import pytest

from armada_bootstrap.core.constants.contracts import BASELINE_ADDRESSES
from armada_bootstrap.core.errors import ConfigurationError
from armada_bootstrap.core.types import FundingMode
from armada_bootstrap.core.utils.units import to_raw_units
from armada_bootstrap.deploy.settings import DeploymentConfig
from armada_bootstrap.testing.ledger import AGENT_KEYS, PRIMARY_KEY


def test_defaults_target_testnet_with_known_baseline():
    config = DeploymentConfig.from_env({})

    assert config.chain_id == 10143
    assert config.network == "monad-testnet"
    assert dict(config.baseline) == BASELINE_ADDRESSES[10143]
    assert config.funding_mode == FundingMode.FAUCET
    assert config.min_gas_balance == to_raw_units("0.01")
    assert config.initial_bankroll == to_raw_units("1000")
    assert config.primary_key is None
    assert config.agent_keys == (None,) * 5
    assert not config.append_missing_env_keys


def test_env_values_are_read():
    env = {
        "NETWORK": "local",
        "PRIVATE_KEY": PRIMARY_KEY,
        "AGENT_PRIVATE_KEY_0": AGENT_KEYS[0],
        "AGENT_PRIVATE_KEY_3": AGENT_KEYS[3],
        "FUNDING_MODE": "Mint",
        "AGENT_INITIAL_BANKROLL": "250",
        "MIN_BANKROLL": "200",
        "SKIP_WIRING": "true",
        "SKIP_UPGRADES": "1",
        "SKIP_FUNDING": "no",
        "ENV_APPEND_MISSING": "yes",
    }

    config = DeploymentConfig.from_env(env)

    assert config.chain_id == 31337
    assert dict(config.baseline) == {}
    assert config.primary_key == PRIMARY_KEY
    assert config.agent_keys == (AGENT_KEYS[0], None, None, AGENT_KEYS[3], None)
    assert config.funding_mode == FundingMode.MINT
    assert config.initial_bankroll == to_raw_units("250")
    assert config.skip_wiring and config.skip_upgrades
    assert not config.skip_funding
    assert config.append_missing_env_keys


def test_keys_are_not_in_repr():
    config = DeploymentConfig.from_env({"PRIVATE_KEY": PRIMARY_KEY})

    assert PRIMARY_KEY not in repr(config)


def test_overrides_win():
    config = DeploymentConfig.from_env({"NETWORK": "local"}, chain_id=10143, baseline={})

    assert config.chain_id == 10143
    assert dict(config.baseline) == {}


def test_skip_funding_disables_funding_mode():
    config = DeploymentConfig.from_env({"SKIP_FUNDING": "1"})

    assert config.funding_mode == FundingMode.FAUCET
    assert config.effective_funding_mode == FundingMode.NONE


@pytest.mark.parametrize(
    "env, message",
    [
        ({"CHAIN_ID": "monad"}, "CHAIN_ID"),
        ({"NETWORK": "sepolia"}, "Unknown NETWORK"),
        ({"FUNDING_MODE": "airdrop"}, "FUNDING_MODE"),
        ({"MIN_GAS_BALANCE": "a lot"}, "MIN_GAS_BALANCE"),
        ({"AGENT_INITIAL_BANKROLL": "50"}, "at least MIN_BANKROLL"),
    ],
)
def test_invalid_settings(env, message):
    with pytest.raises(ConfigurationError, match=message):
        DeploymentConfig.from_env(env)


def test_unknown_contract_rejected():
    with pytest.raises(ConfigurationError, match="Unknown contract"):
        DeploymentConfig(chain_id=31337, contracts=("Kraken",))


def test_replace_revalidates():
    config = DeploymentConfig(chain_id=31337)

    assert config.replace(skip_wiring=True).skip_wiring
    with pytest.raises(ConfigurationError):
        config.replace(initial_bankroll=0)
