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

from __future__ import annotations

from typing import Dict, List, Tuple

from ..domain.entry import EntryType
from ..domain.errors import InvariantError

# Categories whose entries get hashed, in summary order.
HASHED_TYPES: Tuple[EntryType, ...] = (
    EntryType.DIRECTORY,
    EntryType.REGULAR,
    EntryType.DEVICE,
    EntryType.SYMLINK,
)
UNHASHED_TYPES: Tuple[EntryType, ...] = (EntryType.UNSUPPORTED, EntryType.INVALID)


class StatCollector:
    """
    Per-input record of every entry the walk touched, by category, plus the
    number of bytes fed to the digest for each hashed category.

    Only used for reporting; nothing here influences the digests.
    """

    def __init__(self) -> None:
        self._paths: Dict[EntryType, List[str]] = {}
        self._written: Dict[EntryType, int] = {}
        self._ignored: List[str] = []
        self.reset()

    def reset(self) -> None:
        self._paths = {t: [] for t in HASHED_TYPES + UNHASHED_TYPES}
        self._written = {t: 0 for t in HASHED_TYPES}
        self._ignored = []

    def record(self, entry_type: EntryType, path: str, written: int = 0) -> None:
        """
        Count `path` under `entry_type`, adding `written` hashed bytes.

        Raises:
            InvariantError: if bytes are reported for a category that is never hashed.
        """
        if entry_type not in self._paths:
            raise InvariantError(f"no stat category for {entry_type!r}")
        if written and entry_type not in self._written:
            raise InvariantError(f"{entry_type.label} entries are never hashed")
        self._paths[entry_type].append(path)
        if entry_type in self._written:
            self._written[entry_type] += int(written)

    def record_ignored(self, path: str) -> None:
        self._ignored.append(path)

    def paths(self, entry_type: EntryType) -> Tuple[str, ...]:
        return tuple(self._paths[entry_type])

    @property
    def ignored(self) -> Tuple[str, ...]:
        return tuple(self._ignored)

    def count(self, entry_type: EntryType) -> int:
        return len(self._paths[entry_type])

    def written(self, entry_type: EntryType) -> int:
        return self._written.get(entry_type, 0)

    @property
    def total_count(self) -> int:
        """Hashed entries only; unsupported/invalid/ignored are listed separately."""
        return sum(self.count(t) for t in HASHED_TYPES)

    @property
    def total_written(self) -> int:
        return sum(self._written.values())
