# Core modules

from .config import settings
from .session import SessionCodec

__all__ = ["settings", "SessionCodec"]
