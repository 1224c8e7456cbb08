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

from abc import ABC, abstractmethod


class SquashPort(ABC):
    """
    Accumulates per-entry contributions into one aggregate buffer.

    Implementations differ in whether the result depends on update order, and
    say so through `version`. Aggregates of different versions are not
    comparable.
    """

    label: str = "squash"
    version: int = 0

    @abstractmethod
    def reset(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def update(self, data: bytes) -> None:
        """Feed the raw bytes of one entry's contribution."""
        raise NotImplementedError

    @abstractmethod
    def finalize(self) -> bytes:
        """Return the aggregate buffer; the caller digests it for output."""
        raise NotImplementedError

    @property
    def tag(self) -> str:
        return f"[{self.label}][v{self.version}]"
