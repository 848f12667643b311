# admin_console/config.py
import os
from typing import Mapping, Optional

from pydantic import BaseModel

DEFAULT_API_URL = "http://127.0.0.1:8085/api"


class Settings(BaseModel):
    api_url: str = DEFAULT_API_URL
    # None leaves the transport default in place
    timeout: Optional[float] = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        timeout = env.get("ADMINSTORE_TIMEOUT")
        return cls(
            api_url=env.get("ADMINSTORE_API_URL", DEFAULT_API_URL).rstrip("/"),
            timeout=float(timeout) if timeout else None,
            log_level=env.get("ADMINSTORE_LOG_LEVEL", "WARNING").upper(),
        )
