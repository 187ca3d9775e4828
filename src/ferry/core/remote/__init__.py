from ferry.core.remote.abc import PortForward, RemoteExecutor
from ferry.core.remote.printing import PrintingRemoteExecutor
from ferry.core.remote.real import RealRemoteExecutor

__all__ = ["PortForward", "PrintingRemoteExecutor", "RealRemoteExecutor", "RemoteExecutor"]
