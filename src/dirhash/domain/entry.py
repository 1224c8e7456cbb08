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

import enum
from dataclasses import dataclass
from typing import Union

from .errors import InvariantError


class EntryType(enum.Enum):
    """Closed set of entry kinds; the value doubles as the human label."""

    DIRECTORY = "directory"
    REGULAR = "regular file"
    DEVICE = "device"
    SYMLINK = "symlink"
    UNSUPPORTED = "unsupported file"
    INVALID = "invalid file"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class Resolved:
    """A symlink chain followed to its end. `type` is never SYMLINK."""

    target: str
    type: EntryType

    def __post_init__(self) -> None:
        if self.type is EntryType.SYMLINK:
            raise InvariantError(f"{self.target} resolved to a symlink")


@dataclass(frozen=True)
class Broken:
    """Symlink whose target does not exist."""

    path: str
    reason: str = ""


@dataclass(frozen=True)
class CycleOrError:
    """Symlink loop, permission error, or anything else that stopped resolution."""

    path: str
    reason: str = ""


Resolution = Union[Resolved, Broken, CycleOrError]
