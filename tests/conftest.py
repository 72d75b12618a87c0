import os

import pytest

# keep the streamlit module importable without rendering
os.environ["HOLDERS_DASHBOARD_TEST_MODE"] = "1"

from common.settings import Settings
from ingestion.rpc import RpcResponseError

RPC = "https://rpc.test.invalid"
MINT = "So11111111111111111111111111111111111111112"
TOKEN_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"


class FakeRpc:
    """
    Stand-in for ingestion.rpc.rpc_call. Handlers are keyed by method and
    receive the params list; a handler may raise to simulate RPC errors.
    """

    def __init__(self, **handlers):
        self.handlers = handlers
        self.calls = []

    def __call__(self, rpc_url, method, params, **kw):
        self.calls.append((method, params))
        handler = self.handlers.get(method)
        if handler is None:
            raise AssertionError(f"unexpected RPC call {method}")
        return handler(params)

    def methods(self):
        return [m for m, _ in self.calls]


def largest(*rows, decimals=6):
    return {"context": {"slot": 1}, "value": [
        {"address": a, "amount": str(amt), "decimals": decimals, "uiAmountString": ""} for a, amt in rows
    ]}


def parsed_accounts(addresses, owners):
    value = []
    for a in addresses:
        owner = owners.get(a)
        if owner is None:
            value.append(None)
        else:
            value.append({"data": {"parsed": {"info": {"owner": owner}, "type": "account"}, "program": "spl-token"}})
    return {"context": {"slot": 1}, "value": value}


def account_info(owner):
    return {"context": {"slot": 1}, "value": {"owner": owner, "data": ["", "base64"]}}


def mint_not_found(params):
    raise RpcResponseError("Invalid param: could not find mint", -32602)


@pytest.fixture
def settings():
    return Settings(rpc={"url": RPC})


@pytest.fixture
def lazy_settings():
    return Settings(rpc={"url": RPC}, holders={"eager_program_lookup": False})


@pytest.fixture
def fake_rpc(monkeypatch):
    """Install a FakeRpc built from method handlers, return it."""
    def install(**handlers):
        fake = FakeRpc(**handlers)
        monkeypatch.setattr("ingestion.solana_tokens.rpc_call", fake)
        return fake
    return install
