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
from ..hashing.hashlib_hasher import MD5, HashlibHasher, hex_encode


class SortedSquash(SquashPort):
    """
    Order-independent aggregate (v1).

    Each contribution is reduced to the hex MD5 of its bytes; `finalize` sorts
    the hex strings and concatenates them, so traversal order has no effect.
    """

    version = 1

    def __init__(self, hasher: Optional[HasherPort] = None) -> None:
        self._hasher = hasher or HashlibHasher(MD5)
        self._sums: list[str] = []

    def reset(self) -> None:
        self._sums.clear()

    def update(self, data: bytes) -> None:
        digest, _ = self._hasher.hash_bytes(data)
        self._sums.append(hex_encode(digest))

    def finalize(self) -> bytes:
        return "".join(sorted(self._sums)).encode("ascii")

