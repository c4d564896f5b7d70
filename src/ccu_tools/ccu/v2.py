"""
Akamai Cache Control Utility (CCU) API v2 client.

Requests are authenticated with HTTP Basic credentials and sent through an
``httpx.Client``. A per-call ``timeout`` bounds each request; when omitted the
client's own timeout applies.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, Field, ValidationError

from ccu_tools.ccu.errors import (
    DecodeError,
    EncodingError,
    RequestConstructionError,
    TransportError,
    UnauthorizedError,
    assert_success,
    format_error,
)
from ccu_tools.utils import uris

__all__ = [
    "API_URL",
    "Client",
    "Response",
    "QueueLengthResponse",
    "PurgeRequest",
    "PurgeResponse",
    "PurgeStatusResponse",
]

logger = logging.getLogger(__name__)

API_URL = "https://api.ccu.akamai.com"
DEFAULT_QUEUE = "default"

R = TypeVar("R", bound="Response")


class Response(BaseModel):
    """Fields common to all API replies."""

    support_id: str = Field(alias="supportId", default="")
    status_code: int = Field(alias="httpStatus", default=0)
    title: str = ""
    detail: str = ""
    described_by: str = Field(alias="describedBy", default="")

    class Config:
        populate_by_name = True

    def error(self) -> str:
        return format_error(self.title, self.detail)


class QueueLengthResponse(Response):
    queue_length: int = Field(alias="queueLength", default=0)


class PurgeRequest(BaseModel):
    queue: str = ""
    type: str = ""
    action: str = ""
    domain: str = ""
    objects: list[str] = Field(default_factory=list)

    class Config:
        frozen = True

    @classmethod
    def create(cls, *objects: str, **kwargs) -> PurgeRequest:
        """Create a request for an ARL removal on the production network."""
        kwargs.setdefault("type", "arl")
        kwargs.setdefault("action", "remove")
        kwargs.setdefault("domain", "production")
        return cls(objects=list(objects), **kwargs)

    def with_defaults(self) -> PurgeRequest:
        """Return a copy with blank classification fields defaulted."""
        return self.model_copy(
            update={
                "type": self.type or "arl",
                "action": self.action or "remove",
                "domain": self.domain or "production",
            }
        )

    def payload(self) -> dict[str, Any]:
        """JSON body sent to the queue; the queue name is part of the path."""
        data: dict[str, Any] = {}
        for key in ("type", "action", "domain"):
            if value := getattr(self, key):
                data[key] = value
        data["objects"] = self.objects
        return data


class PurgeResponse(Response):
    estimated_seconds: int = Field(alias="estimatedSeconds", default=0)
    purge_id: str = Field(alias="purgeId", default="")
    progress_uri: str = Field(alias="progressUri", default="")
    ping_after_seconds: int = Field(alias="pingAfterSeconds", default=0)
    # Client side submission time, None until the purge is accepted
    time: datetime | None = Field(default=None, exclude=True)

    def eta(self) -> datetime | None:
        """Estimated completion time, or None if the purge was never submitted."""
        if self.time is None:
            return None
        return self.time + timedelta(seconds=self.estimated_seconds)


class PurgeStatusResponse(Response):
    original_estimated_seconds: int = Field(alias="originalEstimatedSeconds", default=0)
    original_queue_length: int = Field(alias="originalQueueLength", default=0)
    purge_id: str = Field(alias="purgeId", default="")
    completion_time: str = Field(alias="completionTime", default="")
    submitted_by: str = Field(alias="submittedBy", default="")
    purge_status: str = Field(alias="purgeStatus", default="")
    submission_time: str = Field(alias="submissionTime", default="")

    def is_done(self) -> bool:
        return self.purge_status == "Done"


class Client:
    def __init__(
        self,
        username: str,
        password: str,
        http_client: httpx.Client | None = None,
        base_url: str = API_URL,
    ):
        """Initializes a CCU v2 client."""
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.Client()
        self.base_url = base_url
        self._auth = httpx.BasicAuth(username, password)

    @classmethod
    def from_settings(cls, settings, http_client: httpx.Client | None = None) -> Client:
        """Create a client from EnvSettings credentials."""
        return cls(
            username=settings.ccu_username or "",
            password=settings.ccu_password or "",
            http_client=http_client,
            base_url=settings.ccu_base_url,
        )

    def __enter__(self) -> Client:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        if self._owns_http_client:
            self.http_client.close()

    def _new_request(
        self,
        method: str,
        url: str,
        payload: Any = None,
        timeout: float | None = None,
    ) -> httpx.Request:
        """Build a request, encoding the payload as a JSON body if given."""
        content = None
        headers = {}
        if payload is not None:
            try:
                content = json.dumps(payload)
            except (TypeError, ValueError) as e:
                raise EncodingError(f"error encoding request as JSON: {e}") from e
            headers["Content-Type"] = "application/json"

        extra = {} if timeout is None else {"timeout": timeout}
        try:
            return self.http_client.build_request(
                method, url, content=content, headers=headers, **extra
            )
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            raise RequestConstructionError(f"error creating HTTP request: {e}") from e

    def _do(self, request: httpx.Request, response_type: type[R]) -> R:
        """Send a request and decode the JSON reply into response_type."""
        logger.debug("%s %s", request.method, request.url)
        try:
            res = self.http_client.send(request, auth=self._auth)
        except httpx.HTTPError as e:
            raise TransportError(f"error sending HTTP request: {e}") from e
        logger.debug("%s %s -> %d", request.method, request.url, res.status_code)

        if res.status_code == httpx.codes.UNAUTHORIZED:
            raise UnauthorizedError("unauthorized")

        try:
            data = json.loads(res.content)
            # A null body decodes to an empty reply and is classified as unknown
            result = response_type.model_validate({} if data is None else data)
        except (ValueError, ValidationError) as e:
            raise DecodeError(f"error decoding JSON response: {e}") from e

        assert_success(result)
        return result

    def get_queue_length(self, timeout: float | None = None) -> QueueLengthResponse:
        """Get the number of purge requests waiting in the default queue."""
        url = uris.join(self.base_url, "ccu/v2/queues", DEFAULT_QUEUE)
        req = self._new_request("GET", url, timeout=timeout)
        return self._do(req, QueueLengthResponse)

    def purge(self, request: PurgeRequest, timeout: float | None = None) -> PurgeResponse:
        """Submit a purge request to its queue."""
        request = request.with_defaults()
        queue = request.queue or DEFAULT_QUEUE
        url = uris.join(self.base_url, "ccu/v2/queues", queue, quote=True)
        req = self._new_request("POST", url, request.payload(), timeout=timeout)
        res = self._do(req, PurgeResponse)

        res = res.model_copy(update={"time": datetime.now(timezone.utc)})
        logger.info(
            "Submitted purge %s of %d objects, estimated %ds",
            res.purge_id,
            len(request.objects),
            res.estimated_seconds,
        )
        return res

    def get_purge_status(
        self, purge_id: str, timeout: float | None = None
    ) -> PurgeStatusResponse:
        """Get the status of a previously submitted purge."""
        url = uris.join(self.base_url, "ccu/v2/purges", purge_id, quote=True)
        req = self._new_request("GET", url, timeout=timeout)
        return self._do(req, PurgeStatusResponse)
