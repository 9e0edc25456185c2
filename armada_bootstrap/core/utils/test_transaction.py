from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from web3 import AsyncWeb3

from armada_bootstrap.core.constants import SUPPORTED_CHAINS
from armada_bootstrap.core.constants.base import (
    SUGGESTED_GAS_PRICE_MULTIPLIER,
    SUGGESTED_PRIORITY_FEE_MULTIPLIER,
)
from armada_bootstrap.core.utils.transaction import (
    GasEstimationError,
    TransactionRevertedError,
    _get_transaction_from_address,
    gas_limit_transaction,
    gas_price_transaction,
    nonce_transaction,
    send_transaction,
)
from armada_bootstrap.core.utils.web3 import get_transaction_chain_id

RANDOM_USER_0 = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
MONAD_TESTNET = 10143


def _web3_with_block(block: dict, reward: int = 1_000_000_000) -> MagicMock:
    fee_history = MagicMock()
    fee_history.reward = [[reward] for _ in range(10)]
    web3 = MagicMock()
    web3.eth = MagicMock()
    web3.eth.get_block = AsyncMock(return_value=block)
    web3.eth.fee_history = AsyncMock(return_value=fee_history)
    web3.provider.disconnect = AsyncMock()
    return web3


class TestGetChainId:
    def test_valid_chain_id(self):
        transaction = {"chainId": MONAD_TESTNET}
        assert get_transaction_chain_id(transaction) == MONAD_TESTNET

    def test_chain_id_as_string(self):
        transaction = {"chainId": "10143"}
        assert get_transaction_chain_id(transaction) == MONAD_TESTNET

    def test_empty_transaction(self):
        with pytest.raises(ValueError, match="Transaction does not contain chainId"):
            get_transaction_chain_id({})


class TestGetFromAddress:
    def test_valid_checksum_address(self):
        result = _get_transaction_from_address({"from": RANDOM_USER_0})
        assert result == RANDOM_USER_0
        assert AsyncWeb3.is_checksum_address(result)

    def test_lowercase_address_converted_to_checksum(self):
        result = _get_transaction_from_address({"from": RANDOM_USER_0.lower()})
        assert result == RANDOM_USER_0

    def test_empty_transaction(self):
        with pytest.raises(
            ValueError, match="Transaction does not contain from address"
        ):
            _get_transaction_from_address({})


@pytest.mark.asyncio
class TestNonceTransaction:
    @patch("armada_bootstrap.core.utils.transaction.web3s_from_chain_id")
    async def test_noncing_on_all_chains(self, mock_web3s_context):
        web3 = MagicMock()
        web3.eth.get_transaction_count = AsyncMock(return_value=7)
        mock_web3s_context.return_value.__aenter__.return_value = [web3]

        for chain_id in SUPPORTED_CHAINS:
            result = await nonce_transaction({"from": RANDOM_USER_0, "chainId": chain_id})
            assert result["nonce"] == 7

    @patch("armada_bootstrap.core.utils.transaction.web3s_from_chain_id")
    async def test_multiple_web3s_returns_max_nonce(self, mock_web3s_context):
        web3s = []
        for nonce in (5, 8, 6):
            web3 = MagicMock()
            web3.eth.get_transaction_count = AsyncMock(return_value=nonce)
            web3s.append(web3)
        mock_web3s_context.return_value.__aenter__.return_value = web3s

        transaction = {"from": RANDOM_USER_0, "chainId": MONAD_TESTNET, "data": "0xabcd"}
        result = await nonce_transaction(transaction)

        assert result["nonce"] == 8
        assert result["data"] == "0xabcd"
        assert "nonce" not in transaction
        for web3 in web3s:
            web3.eth.get_transaction_count.assert_called_once_with(
                RANDOM_USER_0, block_identifier="pending"
            )


@pytest.mark.asyncio
class TestGasPriceTransaction:
    @patch("armada_bootstrap.core.utils.transaction.web3s_from_chain_id")
    async def test_eip1559_max_aggregation(self, mock_web3s_context):
        mock_web3s_context.return_value.__aenter__.return_value = [
            _web3_with_block({"baseFeePerGas": 30_000_000_000}, 2_000_000_000),
            _web3_with_block({"baseFeePerGas": 35_000_000_000}, 3_000_000_000),
            _web3_with_block({"baseFeePerGas": 32_000_000_000}, 2_500_000_000),
        ]

        result = await gas_price_transaction({"chainId": MONAD_TESTNET})

        expected_priority = int(3_000_000_000 * SUGGESTED_PRIORITY_FEE_MULTIPLIER)
        expected_max_fee = int(
            35_000_000_000 * 2 + 3_000_000_000 * SUGGESTED_PRIORITY_FEE_MULTIPLIER
        )
        assert result["maxPriorityFeePerGas"] == expected_priority
        assert result["maxFeePerGas"] == expected_max_fee
        assert "gasPrice" not in result

    @patch("armada_bootstrap.core.utils.transaction.web3s_from_chain_id")
    async def test_legacy_pricing_without_base_fee(self, mock_web3s_context):
        web3s = []
        for price in (5_000_000_000, 8_000_000_000):
            web3 = _web3_with_block({"number": 1})
            # gas_price is an awaitable property
            web3.eth.gas_price = AsyncMock(return_value=price)()
            web3s.append(web3)
        mock_web3s_context.return_value.__aenter__.return_value = web3s

        result = await gas_price_transaction({"chainId": 31337})

        assert result["gasPrice"] == int(8_000_000_000 * SUGGESTED_GAS_PRICE_MULTIPLIER)
        assert "maxFeePerGas" not in result
        assert "maxPriorityFeePerGas" not in result


@pytest.mark.asyncio
class TestGasLimitTransaction:
    @patch("armada_bootstrap.core.utils.transaction.web3s_from_chain_id")
    async def test_gas_limit_is_buffered(self, mock_web3s_context):
        web3 = MagicMock()
        web3.eth.estimate_gas = AsyncMock(return_value=21_000)
        mock_web3s_context.return_value.__aenter__.return_value = [web3]

        result = await gas_limit_transaction({"chainId": MONAD_TESTNET, "gas": 1})

        assert result["gas"] > 21_000

    @patch("armada_bootstrap.core.utils.transaction.web3s_from_chain_id")
    async def test_all_estimates_failing_raises(self, mock_web3s_context):
        web3 = MagicMock()
        web3.eth.estimate_gas = AsyncMock(
            side_effect=Exception("execution reverted: Not owner")
        )
        mock_web3s_context.return_value.__aenter__.return_value = [web3]

        with pytest.raises(GasEstimationError, match="Not owner"):
            await gas_limit_transaction({"chainId": MONAD_TESTNET})


@pytest.mark.asyncio
class TestSendTransaction:
    @pytest.fixture
    def prepared(self):
        return {
            "from": RANDOM_USER_0,
            "chainId": MONAD_TESTNET,
            "gas": 50_000,
            "nonce": 1,
            "maxFeePerGas": 1,
            "maxPriorityFeePerGas": 1,
        }

    @patch("armada_bootstrap.core.utils.transaction.wait_for_transaction_receipt")
    @patch("armada_bootstrap.core.utils.transaction.broadcast_transaction")
    @patch("armada_bootstrap.core.utils.transaction.gas_price_transaction")
    @patch("armada_bootstrap.core.utils.transaction.nonce_transaction")
    @patch("armada_bootstrap.core.utils.transaction.gas_limit_transaction")
    async def test_raises_on_revert(
        self,
        mock_gas_limit,
        mock_nonce,
        mock_gas_price,
        mock_broadcast,
        mock_wait_receipt,
        prepared,
    ):
        mock_gas_limit.return_value = prepared
        mock_nonce.return_value = prepared
        mock_gas_price.return_value = prepared
        mock_broadcast.return_value = "0xdeadbeef"
        mock_wait_receipt.side_effect = TransactionRevertedError(
            "0xdeadbeef", {"status": 0, "gasUsed": 50_000}
        )

        async def sign_callback(_tx: dict) -> bytes:
            return b"\x00"

        with pytest.raises(TransactionRevertedError, match="likely out of gas"):
            await send_transaction(
                {"from": RANDOM_USER_0, "chainId": MONAD_TESTNET}, sign_callback
            )

    @patch("armada_bootstrap.core.utils.transaction.wait_for_transaction_receipt")
    @patch("armada_bootstrap.core.utils.transaction.broadcast_transaction")
    @patch("armada_bootstrap.core.utils.transaction.gas_price_transaction")
    @patch("armada_bootstrap.core.utils.transaction.nonce_transaction")
    @patch("armada_bootstrap.core.utils.transaction.gas_limit_transaction")
    async def test_returns_hash_and_receipt(
        self,
        mock_gas_limit,
        mock_nonce,
        mock_gas_price,
        mock_broadcast,
        mock_wait_receipt,
        prepared,
    ):
        mock_gas_limit.return_value = prepared
        mock_nonce.return_value = prepared
        mock_gas_price.return_value = prepared
        mock_broadcast.return_value = "abc"
        mock_wait_receipt.return_value = {"status": 1, "gasUsed": 40_000}

        signed: list[dict] = []

        async def sign_callback(tx: dict) -> bytes:
            signed.append(tx)
            return b"\x01"

        txn_hash, receipt = await send_transaction(
            {"from": RANDOM_USER_0, "chainId": MONAD_TESTNET}, sign_callback
        )

        assert txn_hash == "0xabc"
        assert receipt["gasUsed"] == 40_000
        assert signed == [prepared]
        mock_broadcast.assert_awaited_once_with(MONAD_TESTNET, b"\x01")

    async def test_requires_sign_callback(self):
        with pytest.raises(ValueError, match="sign_callback"):
            await send_transaction({"chainId": MONAD_TESTNET}, None)
