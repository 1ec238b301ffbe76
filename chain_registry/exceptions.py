class ChainRegistryException(Exception):
    pass


class NotFound(ChainRegistryException):
    pass


class ChainNotFound(NotFound, KeyError):
    def __init__(self, key: str, field: str = "chain_id"):
        super().__init__(key)

        self.key = key
        self.field = field

    def __str__(self) -> str:
        return f"Chain not found: {self.field}={self.key!r}"


class SourceNotFound(NotFound):
    def __init__(self, path):
        super().__init__(path)

        self.path = path

    def __str__(self) -> str:
        return f"Registry source not found: {self.path}"


class NetworkError(ChainRegistryException):
    def __init__(self, url: str, reason):
        super().__init__(url, reason)

        self.url = url
        self.reason = reason

    def __str__(self) -> str:
        return f"Request to {self.url} failed: {self.reason}"


class HttpError(ChainRegistryException):
    def __init__(self, status: int, url: str):
        super().__init__(status, url)

        self.status = status
        self.url = url

    def __str__(self) -> str:
        return f"HTTP {self.status} for {self.url}"


class ParseError(ChainRegistryException):
    def __init__(self, slug: str, detail: str):
        super().__init__(slug, detail)

        self.slug = slug
        self.detail = detail

    def __str__(self) -> str:
        return f"Failed to parse chain {self.slug!r}.\nDetail: {self.detail}"


class RegistryIOError(ChainRegistryException):
    def __init__(self, path, reason):
        super().__init__(path, reason)

        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return f"Failed to read {self.path}: {self.reason}"
