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

import logging
from importlib.metadata import PackageNotFoundError, version as _dist_version
from typing import List, Optional

import typer

from ..adapters.filesystem import LocalFS
from ..adapters.hashing import HASH_ALGORITHMS, HashlibHasher, available_algorithms
from ..adapters.squash import make_squash
from ..domain import (
    ConfigurationError,
    DirhashError,
    UnsupportedAlgorithmError,
    WalkConfig,
)
from ..domain.config import DEFAULT_HASH_ALGO
from ..services import TreeWalker

from ..logging_config import setup_logging

setup_logging()

app = typer.Typer(help="dirhash CLI - Recursive file tree message digests")

logger = logging.getLogger(__name__)


def _package_version() -> str:
    try:
        return _dist_version("dirhash")
    except PackageNotFoundError:
        return "0+unknown"


def _wire(config: WalkConfig) -> TreeWalker:
    """
    Minimal composition root:
      LocalFS + HashlibHasher(config.hash_algo) + make_squash
    """
    try:
        hasher = HashlibHasher(config.hash_algo)
    except UnsupportedAlgorithmError as e:
        raise typer.BadParameter(str(e), param_hint="'--hash-algo'")
    try:
        config = config.validate()
    except ConfigurationError as e:
        raise typer.BadParameter(str(e))

    return TreeWalker(LocalFS(), hasher, config, make_squash, emit=typer.echo)


@app.command("hash")
def hash_paths(
    paths: List[str] = typer.Argument(..., help="Files or directories to hash"),
    hash_algo: str = typer.Option(
        DEFAULT_HASH_ALGO,
        "--hash-algo",
        "--hash_algo",
        envvar="DIRHASH_HASH_ALGO",
        help="Hash algorithm to use",
    ),
    hash_verify: Optional[str] = typer.Option(
        None,
        "--hash-verify",
        "--hash_verify",
        help="Message digest to verify in hex string; only matching entries are printed",
    ),
    hash_only: bool = typer.Option(
        False, "--hash-only", "--hash_only", help="Do not print file paths"
    ),
    ignore_dot: bool = typer.Option(
        False, "--ignore-dot", "--ignore_dot", help="Ignore entries start with ."
    ),
    ignore_dot_dir: bool = typer.Option(
        False,
        "--ignore-dot-dir",
        "--ignore_dot_dir",
        help="Ignore entries inside directories start with .",
    ),
    ignore_dot_file: bool = typer.Option(
        False,
        "--ignore-dot-file",
        "--ignore_dot_file",
        help="Ignore files start with .",
    ),
    ignore_symlink: bool = typer.Option(
        False, "--ignore-symlink", "--ignore_symlink", help="Ignore symbolic links"
    ),
    follow_symlink: bool = typer.Option(
        False,
        "--follow-symlink",
        "--follow_symlink",
        help="Follow symbolic links (directory targets are not descended into)",
    ),
    abs_: bool = typer.Option(
        False, "--abs", help="Print file paths in absolute path"
    ),
    swap: bool = typer.Option(
        False, "--swap", help="Print file path first in each line"
    ),
    sort: bool = typer.Option(False, "--sort", help="Walk entries in sorted order"),
    squash: bool = typer.Option(
        False,
        "--squash",
        help="Print squashed message digest instead of per file",
    ),
    squash_version: int = typer.Option(
        1,
        "--squash-version",
        "--squash_version",
        envvar="DIRHASH_SQUASH_VERSION",
        help="Squash algorithm: 1 (order independent) or 2 (order dependent)",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose print"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Print message digests of files under each path, or one squashed digest per path.
    """
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug logging enabled")

    config = WalkConfig(
        hash_algo=hash_algo,
        hash_verify=hash_verify,
        hash_only=hash_only,
        ignore_dot=ignore_dot,
        ignore_dot_dir=ignore_dot_dir,
        ignore_dot_file=ignore_dot_file,
        ignore_symlink=ignore_symlink,
        follow_symlink=follow_symlink,
        abs=abs_,
        swap=swap,
        sort=sort,
        squash=squash,
        squash_version=squash_version,
        verbose=verbose,
    )
    walker = _wire(config)

    try:
        walker.run(paths)
    except DirhashError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)


@app.command()
def algorithms(
    all_: bool = typer.Option(
        False, "--all", help="Also list known algorithms this build lacks, marked with *"
    ),
):
    """
    List hash algorithms usable with --hash-algo.
    """
    usable = set(available_algorithms())
    for name in HASH_ALGORITHMS:
        if name in usable:
            typer.echo(name)
        elif all_:
            typer.echo(f"*{name}")


@app.command()
def version():
    """
    Print version and exit.
    """
    typer.echo(_package_version())
