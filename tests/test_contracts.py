"""Contract wrappers and transaction sending against mocked web3 objects"""

from decimal import Decimal
from unittest.mock import MagicMock, call

import pytest

from univ3_lp.contracts.erc20 import ERC20
from univ3_lp.contracts.nfpm import NFPM
from univ3_lp.contracts.pool import Pool
from univ3_lp.core.exceptions import (
    GasPriceTooHighError,
    InvalidArgumentError,
    PoolError,
    PositionError,
    TransactionError,
)
from univ3_lp.core.types import LiquidityRequest, TickRange
from univ3_lp.utils.transactions import TransactionBuilder

from tests.fakes import NFPM_ADDRESS, POOL, USDC, USDT, WHALE

TX_HASH = bytes.fromhex("ab" * 32)


@pytest.fixture
def token(manager):
    erc20 = ERC20(manager, USDT)
    erc20._info = {"address": USDT, "symbol": "USDT", "name": "Tether USD", "decimals": 6}
    erc20.tx_builder = MagicMock()
    return erc20


class TestERC20:

    def test_reset_then_set(self, token):
        token.contract.functions.allowance.return_value.call.return_value = 5

        token.approve(NFPM_ADDRESS, 100, reset=True)

        assert token.contract.functions.approve.call_args_list == [
            call(NFPM_ADDRESS, 0),
            call(NFPM_ADDRESS, 100),
        ]
        assert token.tx_builder.build_and_send.call_count == 2

    def test_reset_skipped_when_allowance_zero(self, token):
        token.contract.functions.allowance.return_value.call.return_value = 0

        token.approve(NFPM_ADDRESS, 100, reset=True)

        assert token.contract.functions.approve.call_args_list == [call(NFPM_ADDRESS, 100)]

    def test_sufficient_allowance_without_reset(self, token):
        token.contract.functions.allowance.return_value.call.return_value = 1000

        assert token.approve(NFPM_ADDRESS, 100) is None
        token.tx_builder.build_and_send.assert_not_called()

    def test_to_wei_is_exact(self, token):
        assert token.to_wei(Decimal("100")) == 100_000000
        assert token.to_wei("0.000001") == 1
        assert token.to_wei(0.1) == 100000

    def test_to_wei_rejects_extra_precision(self, token):
        with pytest.raises(InvalidArgumentError):
            token.to_wei("0.0000001")

    def test_from_wei(self, token):
        assert token.from_wei(99_500000) == Decimal("99.5")

    def test_bytes32_symbol(self, manager):
        erc20 = ERC20(manager, USDT)
        erc20.contract.functions.symbol.return_value.call.return_value = b"MKR\x00\x00"
        assert erc20._get_text("symbol", "UNKNOWN") == "MKR"


class TestNFPM:

    @pytest.fixture
    def nfpm(self, manager):
        nfpm = NFPM(manager, address=NFPM_ADDRESS)
        nfpm.tx_builder = MagicMock()
        nfpm.tx_builder.build_and_send.return_value = MagicMock(status=1, transactionHash=TX_HASH)
        return nfpm

    @pytest.fixture
    def request_(self):
        return LiquidityRequest(
            USDC, USDT, 3000, TickRange(-180, -60),
            100_000000, 100_000000, 99_500000, 99_500000, WHALE, 1_900_000_000,
        )

    def test_mint_reads_increase_liquidity_event(self, nfpm, request_):
        events = nfpm.contract.events.IncreaseLiquidity.return_value
        events.process_receipt.return_value = [
            {"args": {"tokenId": 7, "liquidity": 55, "amount0": 99_900000, "amount1": 100_000000}}
        ]

        result = nfpm.mint(request_)

        nfpm.contract.functions.mint.assert_called_once_with(request_.to_mint_params())
        assert nfpm.tx_builder.build_and_send.call_args.kwargs["operation_type"] == "mint"
        assert result["token_id"] == 7
        assert result["liquidity"] == 55
        assert result["amount0"] == 99_900000
        assert result["tx_hash"] == "0x" + "ab" * 32

    def test_mint_without_event(self, nfpm, request_):
        nfpm.contract.events.IncreaseLiquidity.return_value.process_receipt.return_value = []

        result = nfpm.mint(request_)

        assert result["token_id"] is None

    def test_missing_position(self, nfpm):
        nfpm.contract.functions.positions.return_value.call.side_effect = Exception("invalid token ID")
        with pytest.raises(PositionError):
            nfpm.get_position(1)

    def test_position_fields(self, nfpm):
        nfpm.contract.functions.positions.return_value.call.return_value = (
            0, WHALE, USDC, USDT, 3000, -180, -60, 55, 0, 0, 0, 0,
        )
        position = nfpm.get_position(7)
        assert position["tick_lower"] == -180
        assert position["liquidity"] == 55


class TestPool:

    def test_price_from_sqrt_price(self, manager):
        pool = Pool(manager, POOL)
        pool.contract.functions.slot0.return_value.call.return_value = (2 ** 96, 0, 0, 1, 1, 0, True)

        assert pool.get_price(6, 6) == 1.0
        assert pool.get_price(18, 6) == pytest.approx(1e12)

    def test_unreadable_slot0(self, manager):
        pool = Pool(manager, POOL)
        pool.contract.functions.slot0.return_value.call.side_effect = Exception("no contract code")
        with pytest.raises(PoolError):
            pool.current_tick


class TestTransactionBuilder:

    @pytest.fixture
    def gas(self):
        gas = MagicMock()
        gas.fee_params.return_value = {"maxFeePerGas": 30, "maxPriorityFeePerGas": 2}
        gas.gas_for.return_value = 120_000
        return gas

    @pytest.fixture
    def func(self):
        func = MagicMock()
        func.build_transaction.side_effect = lambda tx: tx
        return func

    def test_sends_through_manager_signer(self, manager, gas, func):
        manager.send.return_value = TX_HASH
        manager.w3.eth.wait_for_transaction_receipt.return_value = MagicMock(status=1, transactionHash=TX_HASH)

        receipt = TransactionBuilder(manager, gas).build_and_send(func, operation_type="approve")

        sent = manager.send.call_args.args[0]
        assert sent["gas"] == 120_000
        assert sent["maxFeePerGas"] == 30
        assert sent["from"] == WHALE
        assert sent["type"] == 2
        gas.gas_for.assert_called_once_with(func, WHALE, "approve", 1.2)
        manager.w3.eth.wait_for_transaction_receipt.assert_called_once_with("0x" + "ab" * 32)
        assert receipt.status == 1

    def test_reverted_receipt_raises(self, manager, gas, func):
        manager.send.return_value = TX_HASH
        manager.w3.eth.wait_for_transaction_receipt.return_value = MagicMock(status=0, transactionHash=TX_HASH)

        with pytest.raises(TransactionError) as exc:
            TransactionBuilder(manager, gas).build_and_send(func, operation_type="mint")
        assert exc.value.tx_hash == "0x" + "ab" * 32

    def test_fee_cap_stops_before_sending(self, manager, gas, func):
        gas.fee_params.side_effect = GasPriceTooHighError("base fee too high")

        with pytest.raises(GasPriceTooHighError):
            TransactionBuilder(manager, gas).build_and_send(func, operation_type="mint")
        manager.send.assert_not_called()
