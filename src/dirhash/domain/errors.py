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

from typing import Sequence


class DirhashError(Exception):
    """Base exception for domain-specific errors."""


class ConfigurationError(DirhashError):
    """Bad CLI args or unusable config (e.g., malformed verify digest)."""


class UnsupportedAlgorithmError(ConfigurationError):
    """Requested hash algorithm is unknown or not built into this interpreter."""

    def __init__(self, name: str, available: Sequence[str] = ()) -> None:
        self.name = name
        self.available = tuple(available)
        msg = f"Unsupported hash algorithm {name}"
        if self.available:
            msg += f"\nAvailable hash algorithm [{' '.join(self.available)}]"
        super().__init__(msg)


class InputPathError(DirhashError):
    """Top-level input is missing or of a type that cannot be walked."""


class FilesystemError(DirhashError):
    """Unreadable root directory, permission issues, etc."""


class InvariantError(DirhashError):
    """Internal consistency fault; digests produced past this point would be wrong."""
