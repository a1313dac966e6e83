from slowapi import Limiter
from slowapi.util import get_remote_address

from pixora.config import settings

# Keyed by client address; in-memory storage is per process
limiter = Limiter(key_func=get_remote_address, enabled=not settings.is_testing)
