"""
Outbound client for the remove.bg API.

`RemoveBgClient.remove_background` is the single call the relay makes per
request: upload in -> multipart POST with the API key -> PNG bytes out.
"""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
import logging
from typing import Optional

import requests

from .config import Settings
from .errors import TransportError, UpstreamError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-Api-Key"
IMAGE_FIELD = "image_file"
DEFAULT_FILENAME = "file.jpg"


@dataclass(frozen=True)
class Upload:
    content: bytes
    filename: Optional[str] = None
    content_type: Optional[str] = None

    @property
    def upstream_filename(self) -> str:
        return self.filename or DEFAULT_FILENAME


def _reason_phrase(response: requests.Response) -> str:
    if response.reason:
        return response.reason
    try:
        return HTTPStatus(response.status_code).phrase
    except ValueError:
        return ""


class RemoveBgClient:
    """Holds the remove.bg key and issues one POST per relayed upload."""

    def __init__(
        self,
        api_key: str,
        api_url: str,
        size: str = "auto",
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key
        self.api_url = api_url
        self.size = size
        self.timeout = timeout
        # None means one standalone requests.post per call.
        self._session = session

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[requests.Session] = None) -> "RemoveBgClient":
        return cls(
            api_key=settings.remove_bg_api_key.get_secret_value(),
            api_url=settings.remove_bg_api_url,
            size=settings.remove_bg_size,
            timeout=settings.request_timeout_seconds,
            session=session,
        )

    def __repr__(self) -> str:
        return f"RemoveBgClient(api_url={self.api_url!r}, size={self.size!r})"

    def remove_background(self, upload: Upload) -> bytes:
        """
        Send one image to remove.bg and return the cut-out PNG.

        Raises:
            UpstreamError: remove.bg answered outside the 2xx range.
            TransportError: no response was received at all.
        """
        files = {
            IMAGE_FIELD: (
                upload.upstream_filename,
                upload.content,
                upload.content_type or "application/octet-stream",
            )
        }
        try:
            post = self._session.post if self._session is not None else requests.post
            resp = post(
                self.api_url,
                headers={API_KEY_HEADER: self._api_key},
                data={"size": self.size},
                files=files,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(exc) from exc

        if not 200 <= resp.status_code < 300:
            logger.warning("remove.bg returned status=%s", resp.status_code)
            raise UpstreamError(resp.status_code, resp.text or _reason_phrase(resp))

        logger.debug("remove.bg returned %d bytes", len(resp.content))
        return resp.content
