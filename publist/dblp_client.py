# publist/dblp_client.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from publist.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def to_data_url(address: str, base_url: Optional[str] = None) -> str:
    """
    Turn a DBLP person address into the URL of its XML export.

    - 'https://dblp.org/pid/12/3456.html' -> '.../pid/12/3456.xml'
    - 'pid/12/3456' -> '{base_url}/pid/12/3456.xml'
    - anything else is fetched as given.
    """
    address = address.strip()
    if address.endswith(".html"):
        return address[: -len(".html")] + ".xml"

    if address.startswith("pid/"):
        base = (base_url or get_settings().base_url).rstrip("/")
        suffix = "" if address.endswith(".xml") else ".xml"
        return f"{base}/{address}{suffix}"

    return address


@dataclass
class DblpClientConfig:
    """
    Configuration for fetching DBLP person pages.
    """

    base_url: str
    timeout: float = 30.0
    max_redirects: int = 10
    user_agent: str = "publist"

    @classmethod
    def from_settings(cls, s: Optional[Settings] = None) -> "DblpClientConfig":
        s = s or get_settings()
        return cls(
            base_url=s.base_url,
            timeout=s.HTTP_TIMEOUT,
            max_redirects=s.MAX_REDIRECTS,
            user_agent=s.USER_AGENT,
        )


class DblpClientError(RuntimeError):
    """
    Error raised when fetching from DBLP fails.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class DblpClient:
    """
    Minimal HTTP client: one GET per call, redirects followed up to
    `max_redirects`, no retries.
    """

    def __init__(
        self,
        config: Optional[DblpClientConfig] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        if config is None:
            config = DblpClientConfig.from_settings()

        self.config = config
        self.session = session if session is not None else requests.Session()
        self.session.max_redirects = config.max_redirects
        self.session.headers["User-Agent"] = config.user_agent

    def fetch(self, address: str) -> str:
        """
        GET the XML export for `address` and return the response body.
        """
        url = to_data_url(address, self.config.base_url)
        logger.debug("GET %s", url)

        try:
            resp = self.session.get(
                url,
                timeout=self.config.timeout,
                allow_redirects=True,
            )
        except requests.exceptions.TooManyRedirects as exc:
            raise DblpClientError(
                f"Exceeded {self.config.max_redirects} redirects fetching {url}",
                url=url,
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise DblpClientError(
                f"Error connecting to DBLP at {url}: {exc}",
                url=url,
            ) from exc

        for hop in resp.history:
            logger.debug("Redirect %s -> %s", hop.status_code, hop.headers.get("Location"))

        if resp.status_code != 200:
            raise DblpClientError(
                f"Request failed. DBLP returned HTTP {resp.status_code} for {resp.url or url}",
                status_code=resp.status_code,
                url=resp.url or url,
            )

        # DBLP serves UTF-8 XML; without a declared charset requests would
        # guess ISO-8859-1 for text/* responses.
        if "charset" not in resp.headers.get("Content-Type", "").lower():
            resp.encoding = "utf-8"
        return resp.text
