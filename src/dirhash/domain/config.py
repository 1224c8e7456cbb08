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

import os
import string
import sys
from dataclasses import dataclass, replace
from typing import Optional

from .errors import ConfigurationError

DEFAULT_HASH_ALGO = "sha256"
SQUASH_VERSIONS: tuple[int, ...] = (1, 2)
MIN_HEXSUM_LEN = 32

_HEXDIGITS = frozenset(string.hexdigits)


def parse_hexsum(value: str) -> Optional[str]:
    """
    Validate a user supplied digest and return it in lowercase without a
    leading "0x", or None if it isn't a plausible hex digest.
    """
    s = value
    if s.startswith("0x"):
        s = s[2:]
    if len(s) < MIN_HEXSUM_LEN:
        return None
    if any(c not in _HEXDIGITS for c in s):
        return None
    return s.lower()


@dataclass(frozen=True)
class WalkConfig:
    """
    Read-only options for one run. Built once by the CLI and handed to every
    component that needs it.
    """

    hash_algo: str = DEFAULT_HASH_ALGO
    hash_verify: Optional[str] = None
    hash_only: bool = False
    ignore_dot: bool = False
    ignore_dot_dir: bool = False
    ignore_dot_file: bool = False
    ignore_symlink: bool = False
    follow_symlink: bool = False
    abs: bool = False
    swap: bool = False
    sort: bool = False
    squash: bool = False
    squash_version: int = 1
    verbose: bool = False

    def validate(self) -> "WalkConfig":
        """
        Check the options that must hold before any traversal begins.

        Returns:
            A copy with `hash_verify` normalized.

        Raises:
            ConfigurationError: on any policy violation.
        """
        if not self.hash_algo:
            raise ConfigurationError("No hash algorithm specified")

        if self.squash_version not in SQUASH_VERSIONS:
            raise ConfigurationError(
                f"Unsupported squash version {self.squash_version}. "
                f"Valid options: {', '.join(str(v) for v in SQUASH_VERSIONS)}"
            )

        verify = self.hash_verify
        if verify:
            parsed = parse_hexsum(verify)
            if parsed is None:
                raise ConfigurationError(f"Invalid verify string {verify}")
            verify = parsed
        else:
            verify = None

        if sys.platform.startswith("win"):
            raise ConfigurationError("Windows unsupported")
        if os.sep != "/":
            raise ConfigurationError(f"Invalid path separator {os.sep}")

        return replace(self, hash_verify=verify)
