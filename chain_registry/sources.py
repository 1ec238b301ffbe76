import asyncio
import json
import logging
from pathlib import Path
from typing import Iterable, Iterator, Mapping

import aiohttp
import requests
from better_proxy import Proxy

from . import config
from .exceptions import (
    HttpError,
    NetworkError,
    ParseError,
    RegistryIOError,
    SourceNotFound,
)

logger = logging.getLogger(__name__)

MANIFEST_SLUG = "<manifest>"


def is_chain_dir_name(name: str) -> bool:
    """
    Registry metadata (`_IBC`, `_template`, `.github`) and the `testnets`
    container are not chain directories.
    """
    return not name.startswith(("_", ".")) and name != config.TESTNETS_DIR


def chain_url(base_url: str, slug: str) -> str:
    return f"{base_url.rstrip('/')}/{slug}/{config.CHAIN_FILENAME}"


def parse_manifest(raw: bytes) -> list[str]:
    """
    :param raw: GitHub contents API listing or a JSON list of slugs
    :return: Chain slugs in listing order
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ParseError(MANIFEST_SLUG, str(e)) from e

    if not isinstance(data, list):
        raise ParseError(MANIFEST_SLUG, f"Expected a list, got {type(data).__name__}")

    slugs = []
    for entry in data:
        if isinstance(entry, str):
            name = entry
        elif isinstance(entry, dict) and entry.get("type", "dir") == "dir" and "name" in entry:
            name = entry["name"]
        else:
            continue

        if is_chain_dir_name(name):
            slugs.append(name)
    return slugs


class DocumentSource:
    """
    Provides raw `chain.json` documents keyed by chain slug.
    """

    def slugs(self) -> list[str]:
        raise NotImplementedError

    def fetch(self, slug: str) -> bytes:
        raise NotImplementedError

    def documents(self) -> Iterator[tuple[str, bytes]]:
        for slug in self.slugs():
            yield slug, self.fetch(slug)


class LocalSource(DocumentSource):
    def __init__(self, path: Path | str, include_testnets: bool = False):
        self.path = Path(path)
        self.include_testnets = include_testnets

    def __repr__(self):
        return f"{self.__class__.__name__}(path={self.path})"

    @staticmethod
    def _chain_slugs(directory: Path, prefix: str = "") -> list[str]:
        try:
            children = sorted(directory.iterdir(), key=lambda child: child.name)
            return [
                prefix + child.name
                for child in children
                if is_chain_dir_name(child.name)
                and child.is_dir()
                and (child / config.CHAIN_FILENAME).is_file()
            ]
        except OSError as e:
            raise RegistryIOError(directory, e) from e

    def slugs(self) -> list[str]:
        if not self.path.is_dir():
            raise SourceNotFound(self.path)

        slugs = self._chain_slugs(self.path)

        testnets_path = self.path / config.TESTNETS_DIR
        if self.include_testnets and testnets_path.is_dir():
            slugs.extend(self._chain_slugs(testnets_path, prefix=f"{config.TESTNETS_DIR}/"))

        return slugs

    def fetch(self, slug: str) -> bytes:
        filepath = self.path / slug / config.CHAIN_FILENAME
        try:
            return filepath.read_bytes()
        except OSError as e:
            raise RegistryIOError(filepath, e) from e


class StaticSource(DocumentSource):
    """In-memory documents, served in mapping order."""

    def __init__(self, documents: Mapping[str, bytes | str | dict]):
        self._documents = dict(documents)

    def __repr__(self):
        return f"{self.__class__.__name__}(slugs={list(self._documents)})"

    def slugs(self) -> list[str]:
        return list(self._documents)

    def fetch(self, slug: str) -> bytes:
        try:
            document = self._documents[slug]
        except KeyError:
            raise SourceNotFound(slug) from None

        if isinstance(document, dict):
            return json.dumps(document).encode()
        if isinstance(document, str):
            return document.encode()
        return document


class BaseRemoteSource:
    def __init__(
            self,
            base_url: str = None,
            *,
            slugs: Iterable[str] = None,
            manifest_url: str = None,
            timeout: float = None,
            proxy: str | Proxy = None,
    ):
        self.base_url = (base_url or config.CHAIN_REGISTRY_URL).rstrip("/")
        self.manifest_url = manifest_url or config.CHAIN_REGISTRY_MANIFEST_URL
        self.timeout = timeout if timeout is not None else config.CHAIN_REGISTRY_TIMEOUT
        self._slugs = list(slugs) if slugs is not None else None

        self._proxy = None
        self.proxy = proxy

    def __repr__(self):
        return f"{self.__class__.__name__}(base_url={self.base_url})"

    @property
    def proxy(self) -> Proxy | None:
        return self._proxy

    @proxy.setter
    def proxy(self, proxy: str | Proxy | None):
        if isinstance(proxy, str):
            proxy = Proxy.from_str(proxy)
        self._proxy = proxy

    @staticmethod
    def _check_status(status: int, url: str):
        if not 200 <= status < 300:
            raise HttpError(status, url)


class RemoteSource(BaseRemoteSource, DocumentSource):
    """
    Requests `<base_url>/<slug>/chain.json` once per chain.

    When no slugs are given they are taken from the manifest listing.
    Every request is attempted once.
    """

    def __init__(self, base_url: str = None, *, session: requests.Session = None, **kwargs):
        super().__init__(base_url, **kwargs)
        self.session = session or requests.Session()

    def _get(self, url: str) -> bytes:
        request_kwargs = {"timeout": self.timeout}
        if self.proxy is not None:
            request_kwargs["proxies"] = {"http": self.proxy.as_url, "https": self.proxy.as_url}

        try:
            response = self.session.get(url, **request_kwargs)
        except requests.RequestException as e:
            raise NetworkError(url, e) from e

        self._check_status(response.status_code, url)
        return response.content

    def slugs(self) -> list[str]:
        if self._slugs is not None:
            return list(self._slugs)

        logger.info("Requesting chain list from %s", self.manifest_url)
        return parse_manifest(self._get(self.manifest_url))

    def fetch(self, slug: str) -> bytes:
        url = chain_url(self.base_url, slug)
        logger.debug("Requesting %s", url)
        return self._get(url)


class AsyncRemoteSource(BaseRemoteSource):
    """
    Same layout as `RemoteSource`, documents are requested concurrently.
    """

    def __init__(
            self,
            session: aiohttp.ClientSession,
            base_url: str = None,
            *,
            concurrency: int = 10,
            **kwargs,
    ):
        super().__init__(base_url, **kwargs)
        self.session = session
        self.concurrency = concurrency

    async def _get(self, url: str) -> bytes:
        request_kwargs = {"timeout": aiohttp.ClientTimeout(total=self.timeout)}
        if self.proxy is not None:
            request_kwargs["proxy"] = self.proxy.as_url

        try:
            async with self.session.get(url, **request_kwargs) as response:
                self._check_status(response.status, url)
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(url, e) from e

    async def slugs(self) -> list[str]:
        if self._slugs is not None:
            return list(self._slugs)

        logger.info("Requesting chain list from %s", self.manifest_url)
        return parse_manifest(await self._get(self.manifest_url))

    async def fetch(self, slug: str) -> bytes:
        url = chain_url(self.base_url, slug)
        logger.debug("Requesting %s", url)
        return await self._get(url)

    async def documents(self) -> list[tuple[str, bytes]]:
        """
        :return: [(slug, raw document)] in slug order regardless of completion order
        """
        slugs = await self.slugs()
        semaphore = asyncio.Semaphore(self.concurrency)

        async def fetch_limited(slug: str) -> bytes:
            async with semaphore:
                return await self.fetch(slug)

        tasks = [asyncio.ensure_future(fetch_limited(slug)) for slug in slugs]
        try:
            raw_documents = await asyncio.gather(*tasks)
        except BaseException:
            # The first failure aborts the load, nothing else may be requested
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return list(zip(slugs, raw_documents))
