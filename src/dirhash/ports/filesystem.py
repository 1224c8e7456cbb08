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
from typing import Callable, Iterator, Optional

from ..domain.entry import EntryType, Resolution

WalkErrorHandler = Callable[[str, OSError], None]


class FilesystemPort(ABC):
    """Abstract interface for filesystem access and entry classification."""

    @abstractmethod
    def walk(self, root: str, onerror: Optional[WalkErrorHandler] = None) -> Iterator[str]:
        """
        Recursively yield absolute entry paths under `root` (excluding `root`),
        depth-first, parents before children. Symlinked directories are
        yielded but not descended into. A subdirectory that cannot be listed
        is passed to `onerror` instead of being yielded.

        Raises:
            FilesystemError: if `root` itself cannot be listed.
        """
        raise NotImplementedError

    @abstractmethod
    def raw_type(self, path: str) -> EntryType:
        """Type of `path` without following a final symlink; INVALID on failure."""
        raise NotImplementedError

    @abstractmethod
    def resolved_type(self, path: str) -> EntryType:
        """Type of `path` after following symlinks; INVALID on failure, never SYMLINK."""
        raise NotImplementedError

    @abstractmethod
    def exists_raw(self, path: str) -> bool:
        """True if `path` is observable without dereferencing it. Never raises."""
        raise NotImplementedError

    @abstractmethod
    def resolve(self, path: str) -> Resolution:
        """Follow the full symlink chain at `path`."""
        raise NotImplementedError

    @abstractmethod
    def open_bytes(self, path: str, chunk_size: int = 65536) -> Iterator[bytes]:
        """Yield file bytes in chunks for hashing."""
        raise NotImplementedError
