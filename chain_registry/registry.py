import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator

import aiohttp
import requests
from better_proxy import Proxy

from .enums import NetworkType, ChainStatus
from .exceptions import ChainNotFound
from .models import ChainInfo
from .sources import DocumentSource, LocalSource, RemoteSource, AsyncRemoteSource

logger = logging.getLogger(__name__)


class ChainRegistry:
    """
    Read-only index of `ChainInfo` records by chain ID and chain name.

    A registry is built in one go from a document source. If the same
    chain ID or chain name appears twice, the document that comes later
    in source order wins. Reloading means building a new registry.
    """

    def __init__(self, chains: Iterable[ChainInfo] = ()):
        chains = list(chains)
        by_chain_id: dict[str, ChainInfo] = {}
        by_chain_name: dict[str, ChainInfo] = {}

        for chain in chains:
            if chain.chain_id in by_chain_id:
                logger.warning(
                    "Duplicate chain_id %r: %s overrides %s",
                    chain.chain_id, chain.chain_name, by_chain_id[chain.chain_id].chain_name,
                )
            if chain.chain_name in by_chain_name:
                logger.warning("Duplicate chain_name %r: later document overrides", chain.chain_name)

            by_chain_id[chain.chain_id] = chain
            by_chain_name[chain.chain_name] = chain

        self._by_chain_id = MappingProxyType(by_chain_id)
        self._by_chain_name = MappingProxyType(by_chain_name)
        # Records overridden under both keys are no longer part of the registry
        self._chains = tuple(
            chain for chain in chains
            if by_chain_id[chain.chain_id] is chain or by_chain_name[chain.chain_name] is chain
        )

    def __repr__(self):
        return f"{self.__class__.__name__}(chains={len(self)})"

    def __len__(self) -> int:
        return len(self._chains)

    def __iter__(self) -> Iterator[ChainInfo]:
        return iter(self._chains)

    def __contains__(self, key: str) -> bool:
        return key in self._by_chain_id or key in self._by_chain_name

    ################################################################################
    # Loading
    ################################################################################

    @classmethod
    def _from_documents(cls, documents: Iterable[tuple[str, bytes]]) -> "ChainRegistry":
        chains = []
        for slug, raw in documents:
            chains.append(ChainInfo.from_json(raw, slug=slug))
            logger.debug("Parsed %s", slug)

        registry = cls(chains)
        logger.info("Loaded %d chains", len(registry))
        return registry

    @classmethod
    def load(cls, source: DocumentSource) -> "ChainRegistry":
        """
        :raises ParseError: If any document is malformed, nothing is returned
        """
        logger.info("Loading chain registry from %r", source)
        return cls._from_documents(source.documents())

    @classmethod
    def from_local(cls, path: Path | str, include_testnets: bool = False) -> "ChainRegistry":
        return cls.load(LocalSource(path, include_testnets=include_testnets))

    @classmethod
    def from_remote(
            cls,
            base_url: str = None,
            *,
            slugs: Iterable[str] = None,
            manifest_url: str = None,
            timeout: float = None,
            proxy: str | Proxy = None,
    ) -> "ChainRegistry":
        with requests.Session() as session:
            source = RemoteSource(
                base_url,
                session=session,
                slugs=slugs,
                manifest_url=manifest_url,
                timeout=timeout,
                proxy=proxy,
            )
            return cls.load(source)

    @classmethod
    async def from_remote_async(
            cls,
            base_url: str = None,
            *,
            session: aiohttp.ClientSession = None,
            slugs: Iterable[str] = None,
            manifest_url: str = None,
            timeout: float = None,
            proxy: str | Proxy = None,
            concurrency: int = 10,
    ) -> "ChainRegistry":
        if session is None:
            async with aiohttp.ClientSession() as session:
                return await cls.from_remote_async(
                    base_url,
                    session=session,
                    slugs=slugs,
                    manifest_url=manifest_url,
                    timeout=timeout,
                    proxy=proxy,
                    concurrency=concurrency,
                )

        source = AsyncRemoteSource(
            session,
            base_url,
            slugs=slugs,
            manifest_url=manifest_url,
            timeout=timeout,
            proxy=proxy,
            concurrency=concurrency,
        )
        logger.info("Loading chain registry from %r", source)
        return cls._from_documents(await source.documents())

    ################################################################################
    # Lookup
    ################################################################################

    def get_by_chain_id(self, chain_id: str) -> ChainInfo:
        """
        :param chain_id: On-chain network identifier, for example `cosmoshub-4`
        :raises ChainNotFound:
        """
        try:
            return self._by_chain_id[chain_id]
        except KeyError:
            raise ChainNotFound(chain_id, "chain_id") from None

    def get_by_chain_name(self, chain_name: str) -> ChainInfo:
        """
        :param chain_name: Registry name of the chain, for example `cosmoshub`
        :raises ChainNotFound:
        """
        try:
            return self._by_chain_name[chain_name]
        except KeyError:
            raise ChainNotFound(chain_name, "chain_name") from None

    def all(self) -> tuple[ChainInfo, ...]:
        return self._chains

    def filter(
            self,
            network_type: NetworkType | str = None,
            status: ChainStatus | str = None,
    ) -> tuple[ChainInfo, ...]:
        if network_type is not None:
            network_type = NetworkType(network_type)
        if status is not None:
            status = ChainStatus(status)

        return tuple(
            chain for chain in self._chains
            if (network_type is None or chain.network_type is network_type)
            and (status is None or chain.status is status)
        )

    @property
    def chain_ids(self) -> tuple[str, ...]:
        return tuple(self._by_chain_id)

    @property
    def chain_names(self) -> tuple[str, ...]:
        return tuple(self._by_chain_name)
