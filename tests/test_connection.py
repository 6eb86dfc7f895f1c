"""Web3Manager signer selection with a mocked node"""

from unittest.mock import MagicMock

import pytest
from web3 import Web3

from univ3_lp.core import connection as connection_module
from univ3_lp.core.connection import Web3Manager
from univ3_lp.core.exceptions import ConfigError, ConnectionError
from univ3_lp.core.signers import ImpersonatedSigner, LocalSigner

from tests.fakes import WHALE

DEV_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


@pytest.fixture
def w3():
    w3 = MagicMock()
    w3.is_connected.return_value = True
    w3.provider.make_request.return_value = {"jsonrpc": "2.0", "id": 1, "result": None}
    return w3


@pytest.fixture
def node(monkeypatch, w3):
    """No .env loading, RPC_URL set, Web3(...) returns the mock"""
    monkeypatch.setattr(connection_module, "load_dotenv", lambda *args, **kwargs: None)
    monkeypatch.setenv("RPC_URL", "http://127.0.0.1:8545")
    monkeypatch.delenv("PRIVATE_KEY", raising=False)
    monkeypatch.delenv("PUBLIC_KEY", raising=False)
    web3_cls = MagicMock(return_value=w3)
    web3_cls.to_checksum_address.side_effect = Web3.to_checksum_address
    monkeypatch.setattr(connection_module, "Web3", web3_cls)
    return w3


class TestSignerSelection:

    def test_impersonation_wins(self, node, monkeypatch):
        monkeypatch.setenv("PRIVATE_KEY", DEV_KEY)

        manager = Web3Manager(require_signer=True, impersonate=WHALE, node="hardhat")

        assert isinstance(manager.signer, ImpersonatedSigner)
        assert manager.address == WHALE
        node.provider.make_request.assert_called_once_with("hardhat_impersonateAccount", [WHALE])

        manager.close()
        assert node.provider.make_request.call_args.args[0] == "hardhat_stopImpersonatingAccount"

    def test_private_key(self, node, monkeypatch):
        monkeypatch.setenv("PRIVATE_KEY", DEV_KEY)

        manager = Web3Manager(require_signer=True)

        assert isinstance(manager.signer, LocalSigner)
        assert manager.address == DEV_ADDRESS

    def test_missing_private_key(self, node):
        with pytest.raises(ConfigError, match="PRIVATE_KEY"):
            Web3Manager(require_signer=True)

    def test_read_only(self, node, monkeypatch):
        monkeypatch.setenv("PUBLIC_KEY", WHALE.lower())

        manager = Web3Manager()

        assert manager.signer is None
        assert manager.address == WHALE
        with pytest.raises(ConfigError):
            manager.send({"to": WHALE})


class TestConnection:

    def test_missing_rpc_url(self, node, monkeypatch):
        monkeypatch.delenv("RPC_URL")
        with pytest.raises(ConfigError, match="RPC_URL"):
            Web3Manager()

    def test_unreachable_node(self, node):
        node.is_connected.return_value = False
        with pytest.raises(ConnectionError):
            Web3Manager()
