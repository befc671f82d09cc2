"""httpx adapter for fetching legacy status pages."""

import asyncio

import httpx

from commonstatus_exporter.core.errors import FetchError


class HttpxStatusFetcher:
    """Implementation of StatusFetcherPort backed by httpx.AsyncClient.

    Args:
        transport: Optional transport, e.g. httpx.MockTransport in tests.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    async def fetch(self, target: str, timeout: float) -> str:
        """Fetch the status page; anything but HTTP 200 is a FetchError.

        ``timeout`` bounds the whole exchange, body included, not only each
        connect or read step.
        """
        try:
            async with asyncio.timeout(timeout):
                async with httpx.AsyncClient(
                    transport=self._transport, timeout=httpx.Timeout(timeout)
                ) as client:
                    response = await client.get(target)
        except (httpx.TimeoutException, TimeoutError) as exc:
            raise FetchError(f"timed out after {timeout:g}s fetching {target}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(f"failed to connect to {target}: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            raise FetchError(
                f"HTTP response status code is not 200: {response.status_code}"
            )
        return response.text
