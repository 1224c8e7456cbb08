# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import hashlib
from typing import Iterable

from ...domain.errors import UnsupportedAlgorithmError
from ...ports.hasher import HashResult, HasherPort, hex_encode

MD5 = "md5"
SHA1 = "sha1"
SHA224 = "sha224"
SHA256 = "sha256"
SHA384 = "sha384"
SHA512 = "sha512"
SHA512_224 = "sha512_224"
SHA512_256 = "sha512_256"
SHA3_224 = "sha3_224"
SHA3_256 = "sha3_256"
SHA3_384 = "sha3_384"
SHA3_512 = "sha3_512"
BLAKE2B = "blake2b"
BLAKE2S = "blake2s"

# Order matters: this is the order `available_algorithms()` reports.
HASH_ALGORITHMS: tuple[str, ...] = (
    MD5,
    SHA1,
    SHA224,
    SHA256,
    SHA384,
    SHA512,
    SHA512_224,
    SHA512_256,
    SHA3_224,
    SHA3_256,
    SHA3_384,
    SHA3_512,
    BLAKE2B,
    BLAKE2S,
)


def _is_usable(name: str) -> bool:
    try:
        hashlib.new(name)
    except ValueError:
        return False
    return True


def available_algorithms() -> list[str]:
    """Names from HASH_ALGORITHMS that this interpreter's hashlib can build."""
    return [name for name in HASH_ALGORITHMS if _is_usable(name)]


class HashlibHasher(HasherPort):
    """Digest primitive backed by `hashlib.new(name)`."""

    def __init__(self, algorithm: str) -> None:
        if algorithm not in HASH_ALGORITHMS or not _is_usable(algorithm):
            raise UnsupportedAlgorithmError(algorithm, available_algorithms())
        self._algorithm = algorithm

    @property
    def name(self) -> str:
        return self._algorithm

    def hash_chunks(self, chunks: Iterable[bytes]) -> HashResult:
        h = hashlib.new(self._algorithm)
        consumed = 0
        for chunk in chunks:
            consumed += len(chunk)
            h.update(chunk)
        return h.digest(), consumed
