from __future__ import annotations

from typing import Dict, Hashable, Iterator, Optional

from barkeep.domain.content import ContainerContent
from barkeep.errors import VesselAlreadyRegisteredError, VesselNotRegisteredError


class VesselRegistry:
    """Owns one ``ContainerContent`` per registered vessel handle."""

    def __init__(self, prune_epsilon: float = 0.01) -> None:
        self.prune_epsilon = prune_epsilon
        self._contents: Dict[Hashable, ContainerContent] = {}

    def register(self, vessel: Hashable, capacity: float) -> ContainerContent:
        if vessel in self._contents:
            raise VesselAlreadyRegisteredError(vessel)
        content = ContainerContent(capacity=capacity, prune_epsilon=self.prune_epsilon)
        self._contents[vessel] = content
        return content

    def deregister(self, vessel: Hashable) -> ContainerContent:
        try:
            return self._contents.pop(vessel)
        except KeyError:
            raise VesselNotRegisteredError(vessel) from None

    def get(self, vessel: Hashable) -> Optional[ContainerContent]:
        return self._contents.get(vessel)

    def require(self, vessel: Hashable) -> ContainerContent:
        content = self._contents.get(vessel)
        if content is None:
            raise VesselNotRegisteredError(vessel)
        return content

    def __contains__(self, vessel: Hashable) -> bool:
        return vessel in self._contents

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._contents)

    def __len__(self) -> int:
        return len(self._contents)
