from .base import BaseProbe
from .bootc import BootcProbe
from .host import HostIntrospector
from .version_file import VersionFileSource

__all__ = [
    "BaseProbe",
    "BootcProbe",
    "HostIntrospector",
    "VersionFileSource",
]
