from .hashlib_hasher import (
    HASH_ALGORITHMS,
    HashlibHasher,
    available_algorithms,
    hex_encode,
)

__all__ = ["HASH_ALGORITHMS", "HashlibHasher", "available_algorithms", "hex_encode"]
