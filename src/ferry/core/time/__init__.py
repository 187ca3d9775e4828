from ferry.core.time.abc import Time
from ferry.core.time.real import RealTime

__all__ = ["RealTime", "Time"]
