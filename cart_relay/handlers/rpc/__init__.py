from .parser import parse_request
from .dispatch import ProtocolDispatcher

__all__ = ["ProtocolDispatcher", "parse_request"]
