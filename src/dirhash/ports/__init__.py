from .filesystem import FilesystemPort
from .hasher import HasherPort
from .squash import SquashPort

__all__ = ["FilesystemPort", "HasherPort", "SquashPort"]
