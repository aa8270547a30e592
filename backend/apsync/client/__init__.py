"""
AP Exam Sync: Client Package
=============================

What:  The client half of the system: async helpers that talk to the sync
       server and mirror its data to a local cache directory.

Modules:
    - sync.py:    SyncClient and its remote helpers
    - cache.py:   AppData (in-memory cache) and LocalMirror (on-disk JSON)
    - config.py:  ClientSettings (APSYNC_SERVER_URL, APSYNC_CACHE_DIR)
"""

from apsync.client.cache import APP_DATA_KEY, CURRENT_USER_KEY, AppData, LocalMirror
from apsync.client.config import ClientSettings
from apsync.client.sync import SyncClient
from apsync.exceptions import RemoteError

__all__ = [
    "APP_DATA_KEY",
    "CURRENT_USER_KEY",
    "AppData",
    "ClientSettings",
    "LocalMirror",
    "RemoteError",
    "SyncClient",
]
