from .base import CapabilityDriver
from .lease import DriverLease

__all__ = ["CapabilityDriver", "DriverLease"]
