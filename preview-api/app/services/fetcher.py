import asyncio
import logging

import httpx

from app.config import GOOGLEBOT_USER_AGENT
from app.services.errors import FetchBadStatus, FetchNetworkError, FetchTimeout

logger = logging.getLogger(__name__)


class RemoteFetcher:
    """Single-attempt, time-bounded GET of a remote page.

    The ``httpx.AsyncClient`` is owned by the caller; redirects are followed
    only if the client is configured to do so.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout: float = 5.0,
        user_agent: str = GOOGLEBOT_USER_AGENT,
    ) -> None:
        self._client = client
        self.timeout = timeout
        self.user_agent = user_agent

    async def fetch(self, url: str) -> str:
        """Return the body of ``url`` as text.

        Raises ``FetchTimeout``, ``FetchBadStatus`` or ``FetchNetworkError``.
        """
        try:
            response = await asyncio.wait_for(
                self._client.get(
                    url,
                    headers={"User-Agent": self.user_agent},
                    timeout=self.timeout,
                ),
                self.timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            raise FetchTimeout(url, self.timeout) from exc
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            # ValueError covers IDNA and other URL encoding failures
            raise FetchNetworkError(url, f"Error fetching {url}: {exc}") from exc

        if not response.is_success:
            raise FetchBadStatus(url, response.status_code)

        try:
            text = response.text
        except (UnicodeDecodeError, LookupError) as exc:
            raise FetchNetworkError(url, f"Undecodable body from {url}") from exc

        logger.debug(
            "preview.fetch.ok",
            extra={"url": url, "status_code": response.status_code, "bytes": len(text)},
        )
        return text
