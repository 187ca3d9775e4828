from ferry.core.docker.abc import Docker, PortBinding
from ferry.core.docker.printing import PrintingDocker
from ferry.core.docker.real import RealDocker

__all__ = ["Docker", "PortBinding", "PrintingDocker", "RealDocker"]
