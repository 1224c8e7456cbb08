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

"""
Pure path helpers. Nothing in here touches the filesystem: normalization is
lexical so a symlink keeps its own identity instead of turning into its
target.
"""

from __future__ import annotations

import os
import posixpath
from typing import TYPE_CHECKING

from ..domain.entry import EntryType
from ..domain.errors import InvariantError

if TYPE_CHECKING:
    from ..domain.config import WalkConfig

SEP = "/"


def normalize(path: str) -> str:
    """Collapse '.', '..' and repeated slashes; drop any trailing slash."""
    if not path:
        return ""
    p = posixpath.normpath(path)
    # POSIX lets normpath keep exactly two leading slashes
    if p.startswith("//"):
        p = SEP + p.lstrip(SEP)
    return p


def normalize_absolute(path: str) -> str:
    if not path:
        raise InvariantError("empty path has no absolute form")
    if not path.startswith(SEP):
        path = posixpath.join(os.getcwd(), path)
    return normalize(path)


def is_absolute(path: str) -> bool:
    return path.startswith(SEP)


def dirname(path: str) -> str:
    return posixpath.dirname(normalize(path))


def basename(path: str) -> str:
    return posixpath.basename(normalize(path))


def trim_prefix(path: str, root: str) -> str:
    """
    Strip `root + "/"` from the front of `path`. Paths outside `root`
    (typically symlink targets) come back unchanged.
    """
    if root == SEP:
        return path.lstrip(SEP) if path.startswith(SEP) else path
    if path.startswith(root + SEP):
        return path[len(root) + 1 :]
    return path


def real_path_for_display(path: str, root: str, display_absolute: bool) -> str:
    if display_absolute:
        require_absolute(path)
        return path
    if path == root:
        return "."
    if root == SEP:
        return path[1:]
    return trim_prefix(path, root)


def require_absolute(path: str) -> None:
    if not is_absolute(path):
        raise InvariantError(f"{path!r} is not an absolute path")


def assert_file_path(path: str, root: str = "") -> None:
    """Walk paths are absolute with no trailing '/'; so is the input prefix."""
    require_absolute(path)
    if len(path) > 1 and path.endswith(SEP):
        raise InvariantError(f"{path!r} ends with {SEP!r}")
    if len(root) > 1 and root.endswith(SEP):
        raise InvariantError(f"input prefix {root!r} ends with {SEP!r}")


def _base_starts_with_dot(path: str) -> bool:
    return basename(path).startswith(".")


def _inside_dot_dir(path: str) -> bool:
    return (SEP + ".") in path


def ignore_dot_dir(path: str) -> bool:
    """Entry is not itself hidden but lives somewhere under a hidden directory."""
    return not _base_starts_with_dot(path) and _inside_dot_dir(path)


def ignore_dot_file(path: str) -> bool:
    return _base_starts_with_dot(path)


def ignore_dot(path: str) -> bool:
    return _base_starts_with_dot(path) or _inside_dot_dir(path)


def should_ignore(path: str, entry_type: EntryType, config: "WalkConfig") -> bool:
    """
    Apply the enabled dot-ignore rules to `path`. Directories are never
    ignored so their children still get visited.
    """
    require_absolute(path)
    if entry_type is EntryType.DIRECTORY:
        return False
    if config.ignore_dot_dir and ignore_dot_dir(path):
        return True
    if config.ignore_dot_file and ignore_dot_file(path):
        return True
    return config.ignore_dot and ignore_dot(path)
