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

from ...domain.errors import ConfigurationError
from ...ports.squash import SquashPort
from .rolling_squash import RollingSquash
from .sorted_squash import SortedSquash

_SQUASH_BY_VERSION = {
    SortedSquash.version: SortedSquash,
    RollingSquash.version: RollingSquash,
}


def make_squash(version: int) -> SquashPort:
    """Return a fresh, empty aggregate for `version`."""
    try:
        cls = _SQUASH_BY_VERSION[version]
    except KeyError:
        raise ConfigurationError(f"Unsupported squash version {version}") from None
    return cls()


__all__ = ["RollingSquash", "SortedSquash", "make_squash"]
