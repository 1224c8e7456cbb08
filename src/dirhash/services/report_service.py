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

from typing import Iterable, List

from ..domain.config import WalkConfig
from ..domain.entry import EntryType
from ..ports.filesystem import FilesystemPort
from .path_policy import real_path_for_display
from .stat_service import HASHED_TYPES, StatCollector

INDENT = " "


def format_count(n: int, msg: str) -> str:
    """'1 file', '2 files', '2 directories'; '???' when there's nothing to count."""
    if not msg:
        return "???"
    s = f"{n} {msg}"
    if n > 1:
        if msg == EntryType.DIRECTORY.label:
            s = s[:-1] + "ies"
        else:
            s += "s"
    return s


def format_xsum(path: str, hexsum: str, swap: bool = False) -> str:
    """Two-space separated line; the default order matches sha256sum and friends."""
    if swap:
        return f"{path}  {hexsum}"
    return f"{hexsum}  {path}"


class ReportService:
    """
    Renders the end-of-input summary from a StatCollector.

    Notes:
      - The verbose block (counts and bytes per category, then the ignored
        listing) is only produced when `config.verbose` is set.
      - Unsupported and invalid entries are always listed.
    """

    def __init__(self, fs: FilesystemPort, config: WalkConfig) -> None:
        self._fs = fs
        self._config = config

    def listing(self, paths: Iterable[str], msg: str, prefix: str) -> List[str]:
        paths = list(paths)
        if not paths:
            return []
        lines = [format_count(len(paths), msg)]
        for path in paths:
            shown = real_path_for_display(path, prefix, self._config.abs)
            raw = self._fs.raw_type(path)
            if raw is EntryType.SYMLINK:
                resolved = self._fs.resolved_type(path)
                lines.append(f"{shown} ({raw.label} -> {resolved.label})")
            else:
                lines.append(f"{shown} ({raw.label})")
        return lines

    def verbose_lines(self, stats: StatCollector, prefix: str) -> List[str]:
        lines = [format_count(stats.total_count, "file")]
        for t in HASHED_TYPES:
            n = stats.count(t)
            if n > 0:
                lines.append(INDENT + format_count(n, t.label))

        lines.append(format_count(stats.total_written, "byte"))
        for t in HASHED_TYPES:
            n = stats.written(t)
            if n > 0:
                lines.append(INDENT + format_count(n, f"{t.label} byte"))

        lines.extend(self.listing(stats.ignored, "ignored file", prefix))
        return lines

    def summary_lines(self, stats: StatCollector, prefix: str) -> List[str]:
        lines: List[str] = []
        if self._config.verbose:
            lines.extend(self.verbose_lines(stats, prefix))
        lines.extend(
            self.listing(
                stats.paths(EntryType.UNSUPPORTED), EntryType.UNSUPPORTED.label, prefix
            )
        )
        lines.extend(
            self.listing(stats.paths(EntryType.INVALID), EntryType.INVALID.label, prefix)
        )
        return lines
