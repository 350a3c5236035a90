# storefront/config.py
import os
from typing import Optional

from pydantic import BaseModel

class Settings(BaseModel):
    gateway_url: str = "http://127.0.0.1:8085"
    api_key: Optional[str] = None
    timeout: float = 10
    log_level: str = "WARNING"

def load_settings(environ=None) -> Settings:
    """Read DASTKAR_* variables; anything unset keeps its default."""
    env = os.environ if environ is None else environ
    values = {}
    for field, var in (("gateway_url", "DASTKAR_GATEWAY_URL"),
                       ("api_key", "DASTKAR_API_KEY"),
                       ("timeout", "DASTKAR_TIMEOUT"),
                       ("log_level", "DASTKAR_LOG_LEVEL")):
        if env.get(var):
            values[field] = env[var]
    return Settings(**values)
