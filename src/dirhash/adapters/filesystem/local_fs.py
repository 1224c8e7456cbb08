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

import errno
import logging
import os
import stat
from typing import Iterator, Optional

from ...domain.entry import Broken, CycleOrError, EntryType, Resolution, Resolved
from ...domain.errors import FilesystemError
from ...ports.filesystem import FilesystemPort, WalkErrorHandler

logger = logging.getLogger(__name__)


def mode_type(mode: int) -> EntryType:
    if stat.S_ISDIR(mode):
        return EntryType.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryType.REGULAR
    if stat.S_ISBLK(mode) or stat.S_ISCHR(mode):
        return EntryType.DEVICE
    if stat.S_ISLNK(mode):
        return EntryType.SYMLINK
    return EntryType.UNSUPPORTED


class LocalFS(FilesystemPort):
    """Local filesystem adapter built on os.lstat/os.stat/os.scandir."""

    def raw_type(self, path: str) -> EntryType:
        try:
            return mode_type(os.lstat(path).st_mode)
        except (OSError, ValueError):
            return EntryType.INVALID

    def resolved_type(self, path: str) -> EntryType:
        # os.stat follows the whole chain, so SYMLINK can't come back from here.
        try:
            return mode_type(os.stat(path).st_mode)
        except (OSError, ValueError):
            return EntryType.INVALID

    def exists_raw(self, path: str) -> bool:
        try:
            os.lstat(path)
        except (OSError, ValueError):
            return False
        return True

    def resolve(self, path: str) -> Resolution:
        try:
            target = os.path.realpath(path, strict=True)
        except OSError as e:
            if e.errno in (errno.ENOENT, errno.ENOTDIR):
                return Broken(path, e.strerror or "")
            return CycleOrError(path, e.strerror or str(e))

        t = self.resolved_type(target)
        if t is EntryType.INVALID:
            # vanished between realpath and stat
            return Broken(path, "target disappeared")
        return Resolved(target, t)

    def walk(
        self, root: str, onerror: Optional[WalkErrorHandler] = None
    ) -> Iterator[str]:
        try:
            entries = self._list(root)
        except OSError as e:
            raise FilesystemError(f"Cannot read directory {root}: {e.strerror}") from e
        yield from self._walk_entries(entries, onerror)

    @staticmethod
    def _list(path: str) -> list[os.DirEntry]:
        with os.scandir(path) as it:
            return list(it)

    def _walk_entries(
        self, entries: list[os.DirEntry], onerror: Optional[WalkErrorHandler]
    ) -> Iterator[str]:
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            if not is_dir:
                yield entry.path
                continue
            # an unlistable directory goes to onerror only, never to the caller
            try:
                children = self._list(entry.path)
            except OSError as e:
                logger.warning("LocalFS.walk: cannot list %s: %s", entry.path, e)
                if onerror is not None:
                    onerror(entry.path, e)
                continue
            yield entry.path
            yield from self._walk_entries(children, onerror)

    def open_bytes(self, path: str, chunk_size: int = 65536) -> Iterator[bytes]:
        with open(path, "rb") as f:
            while True:
                chunk = f.read(chunk_size)
                if not chunk:
                    break
                yield chunk
