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

from typing import Optional

from ...ports.hasher import HasherPort
from ...ports.squash import SquashPort
from ..hashing.hashlib_hasher import SHA1, HashlibHasher


class RollingSquash(SquashPort):
    """
    Order-dependent aggregate (v2): `buffer = SHA1(buffer || data)`.

    Constant state regardless of tree size. Feeding the same entries in a
    different order yields a different result, so this is only comparable
    between runs that walk in the same order (e.g. both with --sort).
    """

    version = 2

    def __init__(self, hasher: Optional[HasherPort] = None) -> None:
        self._hasher = hasher or HashlibHasher(SHA1)
        self._buffer = b""

    def reset(self) -> None:
        self._buffer = b""

    def update(self, data: bytes) -> None:
        self._buffer, _ = self._hasher.hash_bytes(self._buffer + data)

    def finalize(self) -> bytes:
        return self._buffer
