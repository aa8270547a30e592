"""
AP Exam Sync: Client Configuration
===================================

What:  Where the sync client finds the server and keeps its local mirror.
How:   Pydantic Settings with the `APSYNC_` prefix:
           APSYNC_SERVER_URL  (default http://localhost:3000)
           APSYNC_CACHE_DIR   (default ~/.apsync)
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """Sync client settings loaded from `APSYNC_*` environment variables."""

    server_url: str = Field(default="http://localhost:3000")
    cache_dir: Path = Field(default=Path("~/.apsync"))

    model_config = {
        "env_prefix": "APSYNC_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }
