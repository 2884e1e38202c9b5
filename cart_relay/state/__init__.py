from .runtime import RuntimeDeps
from .settings import AppSettings
from .envelope import RequestEnvelope
from .operation import OperationResult

__all__ = ["AppSettings", "OperationResult", "RequestEnvelope", "RuntimeDeps"]
