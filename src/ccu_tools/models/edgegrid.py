from __future__ import annotations

import os

from akamai.edgegrid import EdgeGridAuth, EdgeRc
from pydantic import BaseModel

from ccu_tools.utils import uris

DEFAULT_EDGERC = "~/.edgerc"
DEFAULT_SECTION = "default"


class EdgeGridConfig(BaseModel):
    """Credentials and API host used to sign CCU v3 requests."""

    host: str
    client_token: str
    client_secret: str
    access_token: str
    max_body: int = 131072

    class Config:
        frozen = True

    @classmethod
    def from_edgerc(
        cls, path: str = DEFAULT_EDGERC, section: str = DEFAULT_SECTION
    ) -> EdgeGridConfig:
        """Load a section of an .edgerc file."""
        path = os.path.expanduser(path)
        if not os.path.isfile(path):
            raise FileNotFoundError(f"edgerc file not found: {path}")

        rc = EdgeRc(path)
        if not rc.has_section(section):
            raise ValueError(f"section {section!r} not found in {path}")

        return cls(
            host=rc.get(section, "host"),
            client_token=rc.get(section, "client_token"),
            client_secret=rc.get(section, "client_secret"),
            access_token=rc.get(section, "access_token"),
            max_body=rc.getint(section, "max_body"),
        )

    @property
    def base_url(self) -> str:
        return uris.host_url(self.host)

    def auth(self) -> EdgeGridAuth:
        """Build the request signer for this configuration."""
        return EdgeGridAuth(
            client_token=self.client_token,
            client_secret=self.client_secret,
            access_token=self.access_token,
            max_body=self.max_body,
        )
