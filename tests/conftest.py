"""Shared fixtures: chain documents, an on-disk registry tree and fake HTTP sessions."""

import asyncio
import copy
import json
from pathlib import Path

import pytest

JUNO = {
    "$schema": "../chain.schema.json",
    "chain_name": "juno",
    "status": "live",
    "network_type": "mainnet",
    "website": "https://www.junonetwork.io/",
    "pretty_name": "Juno",
    "chain_type": "cosmos",
    "chain_id": "juno-1",
    "bech32_prefix": "juno",
    "daemon_name": "junod",
    "node_home": "$HOME/.juno",
    "key_algos": ["secp256k1"],
    "slip44": 118,
    "fees": {
        "fee_tokens": [
            {
                "denom": "ujuno",
                "fixed_min_gas_price": 0.075,
                "low_gas_price": 0.075,
                "average_gas_price": 0.1,
                "high_gas_price": 0.125,
            }
        ]
    },
    "staking": {"staking_tokens": [{"denom": "ujuno"}]},
    "codebase": {
        "git_repo": "https://github.com/CosmosContracts/juno",
        "recommended_version": "v21.0.0",
        "compatible_versions": ["v21.0.0"],
        "binaries": {"linux/amd64": "https://github.com/CosmosContracts/juno/releases/download/v21.0.0/junod"},
        "cosmos_sdk_version": "0.47",
        "consensus": {"type": "cometbft", "version": "0.37"},
        "cosmwasm_version": "0.45",
        "cosmwasm_enabled": True,
        "genesis": {"genesis_url": "https://download.dimi.sh/juno-phoenix2-genesis.tar.gz"},
    },
    "peers": {
        "seeds": [
            {"id": "2484353dab0b2c1275765b8ffa2c50b3b36158ca", "address": "seed-node.junochain.com:26656"}
        ],
        "persistent_peers": [
            {
                "id": "b1f46f1a1955fc773d3b73180179b0e0a07adce1",
                "address": "162.55.244.250:39656",
                "provider": "Stakeandrelax",
            }
        ],
    },
    "apis": {
        "rpc": [{"address": "https://rpc-juno.itastakers.com", "provider": "itastakers"}],
        "rest": [{"address": "https://lcd-juno.itastakers.com", "provider": "itastakers"}],
        "grpc": [{"address": "juno-grpc.polkachu.com:12690", "provider": "Polkachu"}],
    },
    "explorers": [
        {
            "kind": "mintscan",
            "url": "https://www.mintscan.io/juno",
            "tx_page": "https://www.mintscan.io/juno/transactions/${txHash}",
        }
    ],
    "logo_URIs": {"png": "https://raw.githubusercontent.com/cosmos/chain-registry/master/juno/images/juno.png"},
}

OSMOSIS = {
    "chain_name": "osmosis",
    "status": "live",
    "network_type": "mainnet",
    "pretty_name": "Osmosis",
    "chain_id": "osmosis-1",
    "bech32_prefix": "osmo",
    "daemon_name": "osmosisd",
    "node_home": "$HOME/.osmosisd",
    "key_algos": ["secp256k1"],
    "slip44": 118,
    "fees": {"fee_tokens": [{"denom": "uosmo", "fixed_min_gas_price": 0.0025}]},
    "staking": {"staking_tokens": [{"denom": "uosmo"}]},
    "apis": {"rpc": [{"address": "https://rpc.osmosis.zone/", "provider": "Osmosis Foundation"}]},
}

JUNO_TESTNET = {
    "chain_name": "junotestnet",
    "status": "live",
    "network_type": "testnet",
    "pretty_name": "Juno Testnet",
    "chain_id": "uni-6",
    "bech32_prefix": "juno",
}


@pytest.fixture
def juno_document() -> dict:
    return copy.deepcopy(JUNO)


@pytest.fixture
def osmosis_document() -> dict:
    return copy.deepcopy(OSMOSIS)


def write_chain(root: Path, slug: str, document: dict | str):
    chain_dir = root / slug
    chain_dir.mkdir(parents=True)
    content = document if isinstance(document, str) else json.dumps(document)
    (chain_dir / "chain.json").write_text(content, encoding="utf-8")


@pytest.fixture
def registry_dir(tmp_path) -> Path:
    """A registry checkout laid out like cosmos/chain-registry."""
    write_chain(tmp_path, "juno", JUNO)
    write_chain(tmp_path, "osmosis", OSMOSIS)
    write_chain(tmp_path, "_template", {"chain_name": "template"})
    write_chain(tmp_path, "testnets/junotestnet", JUNO_TESTNET)
    (tmp_path / "_IBC").mkdir()
    (tmp_path / "README.md").write_text("# Chain Registry", encoding="utf-8")
    return tmp_path


################################################################################
# requests
################################################################################

class FakeResponse:
    def __init__(self, status_code: int, content: bytes):
        self.status_code = status_code
        self.content = content


class FakeSession:
    """Stands in for `requests.Session`; routes map URL to (status, body) or an exception."""

    def __init__(self, routes: dict):
        self.routes = routes
        self.calls = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.closed = True

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        route = self.routes.get(url, (404, b"404: Not Found"))
        if isinstance(route, Exception):
            raise route
        status, body = route
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode()
        return FakeResponse(status, body)


@pytest.fixture
def fake_session():
    return FakeSession


################################################################################
# aiohttp
################################################################################

class FakeAsyncResponse:
    def __init__(self, route, delay: float):
        self._route = route
        self._delay = delay
        self.status = None
        self._body = b""

    async def __aenter__(self):
        await asyncio.sleep(self._delay)
        if isinstance(self._route, Exception):
            raise self._route
        self.status, body = self._route
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode()
        self._body = body
        return self

    async def __aexit__(self, *args):
        return False

    async def read(self) -> bytes:
        return self._body


class FakeAsyncSession:
    """Stands in for `aiohttp.ClientSession`; `delays` maps URL to seconds before the response."""

    def __init__(self, routes: dict, delays: dict = None):
        self.routes = routes
        self.delays = delays or {}
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        route = self.routes.get(url, (404, b"404: Not Found"))
        return FakeAsyncResponse(route, self.delays.get(url, 0))


@pytest.fixture
def fake_async_session():
    return FakeAsyncSession


@pytest.fixture
def make_chain():
    return write_chain
