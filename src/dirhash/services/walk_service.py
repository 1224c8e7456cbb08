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

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from ..domain.config import WalkConfig
from ..domain.entry import EntryType, Resolved
from ..domain.errors import InputPathError, InvariantError
from ..ports.filesystem import FilesystemPort
from ..ports.hasher import HasherPort, encode_text, hex_encode
from ..ports.squash import SquashPort
from .path_policy import (
    SEP,
    assert_file_path,
    basename,
    dirname,
    normalize,
    normalize_absolute,
    real_path_for_display,
    should_ignore,
    trim_prefix,
)
from .report_service import ReportService, format_count, format_xsum
from .stat_service import StatCollector

logger = logging.getLogger(__name__)

Emit = Callable[[str], None]
SquashFactory = Callable[[int], SquashPort]

_WALKABLE_LEAVES = (EntryType.REGULAR, EntryType.DEVICE, EntryType.SYMLINK)


@dataclass
class WalkReport:
    """What one top-level input produced; `squash_hex` is None unless squashing."""

    path: str
    prefix: str
    stats: StatCollector
    squash_hex: Optional[str] = None


@dataclass
class _InputState:
    prefix: str
    # prefix with symlinks resolved, used to map resolved targets back under prefix
    real_prefix: str
    stats: StatCollector
    squash: SquashPort


class TreeWalker:
    """
    Orchestrates hashing of one or more inputs:
      - classifies each entry (raw type first, then resolved for followed symlinks)
      - applies the dot/symlink ignore policy
      - hashes file content, symlink basenames, or directory paths (squash only)
      - prints per-entry lines or feeds a squash, then prints the summary

    Each input gets its own StatCollector and squash; nothing carries over.
    """

    def __init__(
        self,
        fs: FilesystemPort,
        hasher: HasherPort,
        config: WalkConfig,
        squash_factory: SquashFactory,
        *,
        emit: Optional[Emit] = None,
    ) -> None:
        self._fs = fs
        self._hasher = hasher
        self._config = config
        self._squash_factory = squash_factory
        self._emit: Emit = emit or print
        self._report = ReportService(fs, config)

    def run(self, paths: Iterable[str]) -> List[WalkReport]:
        """Process each input in turn. Stops at the first fatal error."""
        paths = list(paths)
        if self._config.verbose:
            self._emit(self._hasher.name)
        reports = []
        for i, raw in enumerate(paths):
            report = self.process_input(raw)
            if report is not None:
                reports.append(report)
            if self._config.verbose and i != len(paths) - 1:
                self._emit("")
        return reports

    def process_input(self, raw: str) -> Optional[WalkReport]:
        """
        Hash a single top-level input.

        A directory input is walked recursively. Any other walkable input is
        processed as a single entry, displayed relative to its parent
        directory.

        Raises:
            InputPathError: input is missing or of an unsupported type.
            FilesystemError: the input directory cannot be listed.
        """
        if not raw:
            logger.warning("TreeWalker: skipping empty input path")
            return None

        # keep a symlink input as given so it isn't replaced by its target
        if self._fs.raw_type(raw) is EntryType.SYMLINK:
            path = raw
        else:
            path = normalize(raw)
            if not self._fs.exists_raw(path):
                raise InputPathError(f"No such path {path}")

        path = normalize_absolute(path)
        assert_file_path(path)

        raw_type = self._fs.raw_type(path)
        if raw_type is EntryType.DIRECTORY:
            prefix = path
        elif raw_type in _WALKABLE_LEAVES:
            prefix = dirname(path)
        else:
            raise InputPathError(f"{path}: Invalid argument ({raw_type.label})")

        if self._fs.resolved_type(prefix) is not EntryType.DIRECTORY:
            raise InvariantError(f"input prefix {prefix} is not a directory")

        resolved_prefix = self._fs.resolve(prefix)
        state = _InputState(
            prefix=prefix,
            real_prefix=(
                resolved_prefix.target
                if isinstance(resolved_prefix, Resolved)
                else prefix
            ),
            stats=StatCollector(),
            squash=self._squash_factory(self._config.squash_version),
        )
        logger.debug("TreeWalker: input %s, prefix %s", path, prefix)

        if raw_type is EntryType.DIRECTORY:
            self._walk(path, state)
        else:
            self._visit(path, state)

        for line in self._report.summary_lines(state.stats, prefix):
            self._emit(line)

        report = WalkReport(path=path, prefix=prefix, stats=state.stats)
        if self._config.squash:
            report.squash_hex = self._emit_squash(path, state)
        return report

    def _walk(self, root: str, state: _InputState) -> None:
        def onerror(path: str, err: OSError) -> None:
            state.stats.record(EntryType.INVALID, path)

        entries = self._fs.walk(root, onerror=onerror)
        if self._config.sort:
            # sorting needs the complete listing before anything is hashed
            entries = iter(sorted(entries))
        for path in entries:
            self._visit(path, state)

    def _visit(self, path: str, state: _InputState) -> None:
        cfg = self._config
        assert_file_path(path, state.prefix)

        t = self._fs.raw_type(path)
        if should_ignore(path, t, cfg):
            logger.debug("### %s ignored %s", path, t.label)
            state.stats.record_ignored(path)
            return

        target = path
        link: Optional[str] = None
        if t is EntryType.SYMLINK:
            if cfg.ignore_symlink:
                logger.debug("### %s ignored %s", path, t.label)
                state.stats.record_ignored(path)
                return
            if not cfg.follow_symlink:
                self._hash_symlink(path, state)
                return
            resolution = self._fs.resolve(path)
            if not isinstance(resolution, Resolved):
                logger.debug("### %s %s (%s)", path, EntryType.INVALID.label, resolution)
                state.stats.record(EntryType.INVALID, path)
                return
            target, t, link = resolution.target, resolution.type, path
            assert_file_path(target)

        logger.debug("### %s %s", path, t.label)
        if t is EntryType.DIRECTORY:
            self._hash_directory(path, target, link, state)
        elif t in (EntryType.REGULAR, EntryType.DEVICE):
            self._hash_file(path, target, link, t, state)
        elif t in (EntryType.UNSUPPORTED, EntryType.INVALID):
            state.stats.record(t, path)
        else:
            raise InvariantError(f"{path} has unexpected file type {t.label}")

    def _logical_target(self, target: str, state: _InputState) -> str:
        """Rewrite a resolved target so it reads relative to the input prefix when it lives under it."""
        real = state.real_prefix
        if real == state.prefix:
            return target
        if target == real:
            return state.prefix
        if target.startswith(real + SEP) or real == SEP:
            tail = target[len(real) :].lstrip(SEP)
            return state.prefix + SEP + tail if state.prefix != SEP else SEP + tail
        return target

    def _identity(self, target: str, link: Optional[str], state: _InputState) -> str:
        """Display path of an entry, as `link -> target` when reached through a followed symlink."""
        shown = real_path_for_display(
            self._logical_target(target, state) if link else target,
            state.prefix,
            self._config.abs,
        )
        if link is None:
            return shown
        ll = link if self._config.abs else trim_prefix(link, state.prefix)
        return f"{ll} -> {shown}"

    def _hash_directory(
        self, path: str, target: str, link: Optional[str], state: _InputState
    ) -> None:
        # the walked root carries no identity of its own
        if link is None and path == state.prefix:
            return
        if not self._config.squash:
            return

        logical = self._logical_target(target, state) if link else target
        rel = "." if logical == state.prefix else trim_prefix(logical, state.prefix)
        digest, written = self._hasher.hash_string(rel)
        state.stats.record(EntryType.DIRECTORY, path, written)

        if self._config.hash_only:
            state.squash.update(digest)
        else:
            identity = self._identity(target, link, state)
            state.squash.update(encode_text(identity) + digest)

    def _hash_file(
        self,
        path: str,
        target: str,
        link: Optional[str],
        t: EntryType,
        state: _InputState,
    ) -> None:
        try:
            digest, written = self._hasher.hash_chunks(self._fs.open_bytes(target))
        except OSError as e:
            logger.warning("TreeWalker: cannot read %s: %s", target, e)
            state.stats.record(EntryType.INVALID, path)
            return
        state.stats.record(t, path, written)
        self._output(digest, lambda: self._identity(target, link, state), state)

    def _hash_symlink(self, path: str, state: _InputState) -> None:
        # the link's own name stands in for it; the target is never read
        logger.debug("### %s %s", path, EntryType.SYMLINK.label)
        digest, written = self._hasher.hash_string(basename(path))
        state.stats.record(EntryType.SYMLINK, path, written)
        self._output(
            digest,
            lambda: real_path_for_display(path, state.prefix, self._config.abs),
            state,
        )

    def _output(
        self, digest: bytes, identity: Callable[[], str], state: _InputState
    ) -> None:
        cfg = self._config
        hexsum = hex_encode(digest)
        if cfg.hash_verify and cfg.hash_verify != hexsum:
            return

        if cfg.hash_only:
            if cfg.squash:
                state.squash.update(digest)
            else:
                self._emit(hexsum)
            return

        shown = identity()
        if cfg.squash:
            state.squash.update(encode_text(shown) + digest)
        else:
            self._emit(format_xsum(shown, hexsum, cfg.swap))

    def _emit_squash(self, path: str, state: _InputState) -> str:
        cfg = self._config
        buf = state.squash.finalize()
        if cfg.verbose:
            self._emit(format_count(len(buf), "squashed byte"))

        digest, _ = self._hasher.hash_bytes(buf)
        hexsum = hex_encode(digest)
        if cfg.hash_verify and cfg.hash_verify != hexsum:
            return hexsum

        if cfg.hash_only:
            self._emit(hexsum)
            return hexsum

        shown = real_path_for_display(path, state.prefix, cfg.abs)
        tag = state.squash.tag
        if shown == ".":
            self._emit(hexsum + tag)
        else:
            self._emit(format_xsum(shown, hexsum, cfg.swap) + tag)
        return hexsum
