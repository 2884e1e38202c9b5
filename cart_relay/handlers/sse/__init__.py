from .session import StreamSession
from .directory import SessionDirectory

__all__ = ["SessionDirectory", "StreamSession"]
