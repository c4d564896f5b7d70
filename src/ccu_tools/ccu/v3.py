"""
Akamai Cache Control Utility (CCU) API v3 client.

This API is only available to accounts with Fast Purge. Requests are signed
with EdgeGrid credentials and sent through a ``requests.Session``.
"""
from __future__ import annotations

import configparser
import json
import logging
import threading
from typing import Any, TypeVar

import requests
from pydantic import BaseModel, Field, ValidationError

from ccu_tools.ccu.errors import (
    ConfigurationError,
    DecodeError,
    EncodingError,
    RequestConstructionError,
    TransportError,
    assert_success,
    format_error,
)
from ccu_tools.models.edgegrid import DEFAULT_EDGERC, DEFAULT_SECTION, EdgeGridConfig
from ccu_tools.utils import uris

__all__ = ["Client", "Response", "PurgeRequest", "PurgeResponse"]

logger = logging.getLogger(__name__)

R = TypeVar("R", bound="Response")


class Response(BaseModel):
    """
    Fields common to all API replies.
    If the status is not in the 2xx range the reply is raised as an ApiError.
    """

    # Identifier to give Akamai Technical Support if issues arise
    support_id: str = Field(alias="supportId", default="")
    status_code: int = Field(alias="httpStatus", default=0)
    title: str = ""
    detail: str = ""
    # URL of the API's machine readable documentation
    described_by: str = Field(alias="describedBy", default="")

    class Config:
        populate_by_name = True

    def error(self) -> str:
        return format_error(self.title, self.detail)


class PurgeRequest(BaseModel):
    # One of "url" (default), "cpcode" or "tag"
    type: str = ""
    # One of "invalidate" (default) or "delete"
    action: str = ""
    # One of "production" (default) or "staging"
    network: str = ""
    # Domain of the content when objects are URL paths
    hostname: str = ""
    objects: list[str] = Field(default_factory=list)

    class Config:
        frozen = True

    def with_defaults(self) -> PurgeRequest:
        """Return a copy with blank type, action and network defaulted."""
        return self.model_copy(
            update={
                "type": self.type or "url",
                "action": self.action or "invalidate",
                "network": self.network or "production",
            }
        )

    def path(self) -> str:
        return f"/ccu/v3/{self.action}/{self.type}/{self.network}"

    def payload(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.hostname:
            data["hostname"] = self.hostname
        data["objects"] = self.objects
        return data


class PurgeResponse(Response):
    estimated_seconds: int = Field(alias="estimatedSeconds", default=0)
    purge_id: str = Field(alias="purgeId", default="")


class Client:
    def __init__(
        self,
        config: EdgeGridConfig | None = None,
        session: requests.Session | None = None,
        edgerc: str = DEFAULT_EDGERC,
        section: str = DEFAULT_SECTION,
    ):
        """
        Initializes a CCU v3 client.

        Without a config, credentials are read from the given .edgerc section
        on first use and kept for the lifetime of the client.
        """
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.edgerc = edgerc
        self.section = section
        self._config = config
        self._config_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings, session: requests.Session | None = None) -> Client:
        return cls(session=session, edgerc=settings.edgerc, section=settings.edgerc_section)

    def __enter__(self) -> Client:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        if self._owns_session:
            self.session.close()

    def config(self) -> EdgeGridConfig:
        """Returns the signing configuration, loading it once if needed."""
        if self._config is not None:
            return self._config

        with self._config_lock:
            if self._config is None:
                logger.debug("Loading edgegrid config [%s] from %s", self.section, self.edgerc)
                try:
                    self._config = EdgeGridConfig.from_edgerc(self.edgerc, self.section)
                except (OSError, ValueError, configparser.Error) as e:
                    raise ConfigurationError(
                        f"error reading edgegrid configuration: {e}"
                    ) from e
        return self._config

    def _new_request(
        self, method: str, path: str, payload: Any = None
    ) -> requests.PreparedRequest:
        """Build a signed request, encoding the payload as a JSON body if given."""
        cfg = self.config()

        body = None
        headers = {}
        if payload is not None:
            try:
                body = json.dumps(payload).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise EncodingError(f"error encoding request as JSON: {e}") from e
            headers["Content-Type"] = "application/json"

        req = requests.Request(
            method,
            uris.join(cfg.base_url, path),
            data=body,
            headers=headers,
            auth=cfg.auth(),
        )
        try:
            return self.session.prepare_request(req)
        except (requests.RequestException, ValueError) as e:
            raise RequestConstructionError(f"error creating HTTP request: {e}") from e

    def _do(
        self,
        request: requests.PreparedRequest,
        response_type: type[R],
        timeout: float | None = None,
    ) -> R:
        """Send a request and decode the JSON reply into response_type."""
        logger.debug("%s %s", request.method, request.url)
        try:
            res = self.session.send(request, timeout=timeout)
        except requests.RequestException as e:
            raise TransportError(f"error sending HTTP request: {e}") from e
        logger.debug("%s %s -> %d", request.method, request.url, res.status_code)

        try:
            data = json.loads(res.content)
            # A null body decodes to an empty reply and is classified as unknown
            result = response_type.model_validate({} if data is None else data)
        except (ValueError, ValidationError) as e:
            raise DecodeError(f"error decoding JSON response: {e}", response=res) from e

        assert_success(result)
        return result

    def purge(self, request: PurgeRequest, timeout: float | None = None) -> PurgeResponse:
        """
        Purge edge content.
        The request is processed asynchronously; the reply carries the purge id
        and an estimate of how long it will take.
        """
        request = request.with_defaults()
        req = self._new_request("POST", request.path(), request.payload())
        res = self._do(req, PurgeResponse, timeout=timeout)
        logger.info(
            "Submitted %s of %d %s objects on %s as %s",
            request.action,
            len(request.objects),
            request.type,
            request.network,
            res.purge_id,
        )
        return res
