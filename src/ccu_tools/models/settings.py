import dotenv
from pydantic.v1 import BaseSettings

from ccu_tools.models.edgegrid import DEFAULT_EDGERC, DEFAULT_SECTION


class EnvSettings(BaseSettings):
    # v2 basic auth
    ccu_username: str | None = None
    ccu_password: str | None = None
    ccu_base_url: str = "https://api.ccu.akamai.com"

    # v3 edgegrid credentials
    edgerc: str = DEFAULT_EDGERC
    edgerc_section: str = DEFAULT_SECTION

    # per request timeout in seconds
    timeout: float | None = None

    # debug
    verbose: bool = False

    @property
    def has_ccu_credentials(self) -> bool:
        return bool(self.ccu_username and self.ccu_password)

    class Config:
        env_file = dotenv.find_dotenv(usecwd=True)
        env_prefix = "akamai_"


env = EnvSettings()
