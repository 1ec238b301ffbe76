from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .enums import NetworkType, ChainStatus
from .exceptions import ParseError


class RegistryModel(BaseModel):
    # Unknown keys in chain.json are dropped, parsed records are read-only
    model_config = ConfigDict(frozen=True, extra="ignore")


class FeeToken(RegistryModel):
    denom: str
    fixed_min_gas_price: float | None = None
    low_gas_price: float | None = None
    average_gas_price: float | None = None
    high_gas_price: float | None = None


class Fees(RegistryModel):
    fee_tokens: tuple[FeeToken, ...] = ()


class StakingToken(RegistryModel):
    denom: str


class Staking(RegistryModel):
    staking_tokens: tuple[StakingToken, ...] = ()


class Consensus(RegistryModel):
    type: str
    version: str | None = None


class Genesis(RegistryModel):
    genesis_url: str | None = None


class Codebase(RegistryModel):
    git_repo: str | None = None
    recommended_version: str | None = None
    compatible_versions: tuple[str, ...] = ()
    binaries: dict[str, str] = Field(default_factory=dict)
    cosmos_sdk_version: str | None = None
    consensus: Consensus | None = None
    # Older documents carry the engine version here instead of `consensus`
    tendermint_version: str | None = None
    cosmwasm_version: str | None = None
    cosmwasm_enabled: bool | None = None
    genesis: Genesis | None = None


class Peer(RegistryModel):
    id: str
    address: str
    provider: str | None = None


class Peers(RegistryModel):
    seeds: tuple[Peer, ...] = ()
    persistent_peers: tuple[Peer, ...] = ()


class Endpoint(RegistryModel):
    address: str
    provider: str | None = None
    archive: bool | None = None


class Apis(RegistryModel):
    rpc: tuple[Endpoint, ...] = ()
    rest: tuple[Endpoint, ...] = ()
    grpc: tuple[Endpoint, ...] = ()


class Explorer(RegistryModel):
    kind: str | None = None
    url: str
    tx_page: str | None = None
    account_page: str | None = None


class ChainInfo(RegistryModel):
    """
    A single `chain.json` document of the Cosmos Chain Registry.

    Only `chain_name` and `chain_id` are required; every other section
    falls back to an empty value when the document omits it.
    """
    chain_name: str
    chain_id: str
    pretty_name: str = ""
    network_type: NetworkType | None = None
    status: ChainStatus | None = None
    chain_type: str | None = None
    website: str | None = None
    bech32_prefix: str | None = None
    daemon_name: str | None = None
    node_home: str | None = None
    key_algos: frozenset[str] = frozenset()
    slip44: int | None = None
    fees: Fees = Field(default_factory=Fees)
    staking: Staking = Field(default_factory=Staking)
    codebase: Codebase = Field(default_factory=Codebase)
    peers: Peers = Field(default_factory=Peers)
    apis: Apis = Field(default_factory=Apis)
    explorers: tuple[Explorer, ...] = ()

    def __str__(self) -> str:
        return self.chain_name

    @classmethod
    def from_json(cls, raw: bytes | str, slug: str = None) -> "ChainInfo":
        """
        :param raw: Contents of a `chain.json` file
        :param slug: Registry directory the document came from, used in errors
        :raises ParseError: On invalid JSON or missing / malformed fields
        """
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise ParseError(slug or "<unknown>", str(e)) from e

    @property
    def is_mainnet(self) -> bool:
        return self.network_type is NetworkType.MAINNET

    @property
    def fee_denoms(self) -> tuple[str, ...]:
        return tuple(token.denom for token in self.fees.fee_tokens)

    @property
    def staking_denoms(self) -> tuple[str, ...]:
        return tuple(token.denom for token in self.staking.staking_tokens)
