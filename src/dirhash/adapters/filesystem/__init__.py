from .local_fs import LocalFS, mode_type

__all__ = ["LocalFS", "mode_type"]
