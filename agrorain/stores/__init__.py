from .base import GaugeStore, RecordStore
from .factory import Backend, open_backend, open_local_backend, open_remote_backend
from .subscription import Subscription

__all__ = [
    "Backend",
    "GaugeStore",
    "RecordStore",
    "Subscription",
    "open_backend",
    "open_local_backend",
    "open_remote_backend",
]
