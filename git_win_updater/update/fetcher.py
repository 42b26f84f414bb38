"""
HTTP retrieval

Thin synchronous httpx wrapper that classifies every GET into success,
transport failure (no response) or HTTP failure (status >= 400).
"""

import logging
from pathlib import Path

import httpx

from git_win_updater.core.exceptions import ConfigError, HttpError, TransportError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192

PROXY_HINT = "Fix or unset the http.proxy setting (git config --global --unset http.proxy)"


def normalize_proxy_url(proxy: str) -> str:
    """
    Give a proxy setting a scheme the way git does

    ``proxy.example.com:3128`` becomes ``http://proxy.example.com:3128``;
    values that already carry a scheme are returned unchanged.
    """
    proxy = proxy.strip()
    if "://" not in proxy:
        return f"http://{proxy}"
    return proxy


class HttpFetcher:
    """
    Performs GET requests with strict success/failure classification

    The fetcher never retries; callers decide whether a TransportError is
    worth another attempt (e.g. after discovering a proxy).

    Example:
        fetcher = HttpFetcher(proxy="http://proxy.example.com:3128")
        tag = fetcher.get("https://gitforwindows.org/latest-tag.txt")
    """

    def __init__(
        self,
        proxy: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize fetcher

        Args:
            proxy: Proxy URL (optional, can be set later)
            transport: Custom httpx transport (mainly for tests)
        """
        self.proxy = proxy
        self.transport = transport

    def _client(self) -> httpx.Client:
        kwargs = {"follow_redirects": True}
        proxy = self._proxy()
        if self.transport is not None:
            # mounts created for a proxy would bypass a custom transport
            kwargs["transport"] = self.transport
        elif proxy is not None:
            kwargs["proxy"] = proxy
        try:
            return httpx.Client(**kwargs)
        except (ValueError, httpx.InvalidURL) as e:
            raise ConfigError(f"Invalid proxy {self.proxy!r}: {e}", recovery_hint=PROXY_HINT) from e

    def _proxy(self) -> httpx.Proxy | None:
        if not self.proxy:
            return None
        try:
            return httpx.Proxy(normalize_proxy_url(self.proxy))
        except (ValueError, httpx.InvalidURL) as e:
            raise ConfigError(f"Invalid proxy {self.proxy!r}: {e}", recovery_hint=PROXY_HINT) from e

    def get(self, url: str) -> str:
        """
        GET a URL

        Args:
            url: URL to fetch

        Returns:
            str: Response body

        Raises:
            TransportError: If no response was obtained
            HttpError: If the status code is >= 400
            ConfigError: If the proxy setting is not a usable URL
        """
        logger.debug(f"GET {url} (proxy={self.proxy or 'none'})")
        try:
            with self._client() as client:
                response = client.get(url)
        except httpx.TransportError as e:
            raise TransportError(f"Unable to fetch {url}: {e}", url=url) from e

        if response.status_code >= 400:
            raise HttpError(response.status_code, response.text, url=url)

        return response.text

    def download(self, url: str, dest: Path) -> Path:
        """
        Stream a URL into a file

        Args:
            url: URL to download
            dest: Target file path

        Returns:
            Path: The written file

        Raises:
            TransportError: If no response was obtained or the stream broke
            HttpError: If the status code is >= 400
            ConfigError: If the proxy setting is not a usable URL
        """
        logger.info(f"Downloading {url} -> {dest}")
        try:
            with self._client() as client:
                with client.stream("GET", url) as response:
                    if response.status_code >= 400:
                        response.read()
                        raise HttpError(response.status_code, response.text, url=url)

                    total_size = int(response.headers.get("content-length", 0))
                    logger.info(f"Download size: {total_size / 1024 / 1024:.2f} MB")

                    with open(dest, "wb") as f:
                        for chunk in response.iter_bytes(chunk_size=CHUNK_SIZE):
                            f.write(chunk)
        except httpx.TransportError as e:
            raise TransportError(f"Download of {url} failed: {e}", url=url) from e

        logger.info(f"Download complete: {dest}")
        return dest
