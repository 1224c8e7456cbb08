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

from abc import ABC, abstractmethod
from typing import BinaryIO, Iterable

HashResult = tuple[bytes, int]


def encode_text(s: str) -> bytes:
    """Bytes of a path or identity string; undecodable path bytes survive the round trip."""
    return s.encode("utf-8", "surrogateescape")


def hex_encode(digest: bytes) -> str:
    """Lowercase hex, two characters per byte."""
    return digest.hex()


class HasherPort(ABC):
    """
    Abstract interface for a named digest primitive.

    Every method returns `(digest_bytes, bytes_consumed)`.
    """

    @abstractmethod
    def hash_chunks(self, chunks: Iterable[bytes]) -> HashResult:
        """Digest an iterable of byte chunks."""
        raise NotImplementedError

    def hash_stream(self, stream: BinaryIO, chunk_size: int = 65536) -> HashResult:
        """Digest a binary stream, reading `chunk_size` bytes at a time."""
        return self.hash_chunks(iter(lambda: stream.read(chunk_size), b""))

    def hash_bytes(self, data: bytes) -> HashResult:
        return self.hash_chunks((data,))

    def hash_string(self, s: str) -> HashResult:
        return self.hash_bytes(encode_text(s))

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name of the hashing algorithm."""
        raise NotImplementedError
