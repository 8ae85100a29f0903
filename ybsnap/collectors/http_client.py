"""Reachability probe and diagnostics page fetcher for cluster nodes."""

import asyncio
import logging
from typing import Optional

import httpx


class NodeHttpClient:
    """TCP probe and HTTP GET against a node's embedded web server."""

    def __init__(
        self,
        probe_timeout_s: float = 1.0,
        fetch_timeout_s: float = 10.0,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize node HTTP client.

        Args:
            probe_timeout_s: Seconds allowed for the TCP connect probe
            fetch_timeout_s: Seconds allowed for the whole HTTP request
            logger: Optional logger instance
        """
        self.probe_timeout_s = probe_timeout_s
        self.fetch_timeout_s = fetch_timeout_s
        self.logger = (logger or logging.getLogger(__name__)).getChild(self.__class__.__name__)

    async def probe(self, host: str, port: int) -> bool:
        """
        Check whether a TCP connection to host:port can be established.

        Args:
            host: Hostname or IP address
            port: TCP port

        Returns:
            bool: True if the connection succeeded within the probe timeout
        """
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, int(port)),
                timeout=self.probe_timeout_s
            )
        except (OSError, asyncio.TimeoutError) as e:
            self.logger.debug(f"Probe failed for {host}:{port}: {e!r}")
            return False

        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            self.logger.debug(f"Close after probe failed for {host}:{port}: {e!r}")
        return True

    async def fetch(self, host: str, port: int, path: str) -> str:
        """
        GET http://host:port/path and return the body.

        Args:
            host: Hostname or IP address
            port: TCP port
            path: Page path without leading slash, e.g. "tablet-server-clocks?raw"

        Returns:
            str: Response body, or "" on transport failure or non-200 status
        """
        url = f"http://{host}:{port}/{path}"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, timeout=self.fetch_timeout_s)

        except httpx.TimeoutException:
            self.logger.warning(f"Request timeout: {url}")
            return ""

        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.warning(f"Request error for {url}: {e}")
            return ""

        if response.status_code != 200:
            self.logger.warning(f"HTTP {response.status_code} from {url}")
            return ""

        return response.text
