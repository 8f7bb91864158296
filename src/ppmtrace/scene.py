from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ppmtrace.protocols import Intersectable


@dataclass(frozen=True, slots=True)
class Scene:
    """Ordered, immutable collection of the objects a render sees.

    The scene holds its objects by value; they live exactly as long as the
    scene does.
    """

    objects: tuple[Intersectable, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "objects", tuple(self.objects))

    def __iter__(self) -> Iterator[Intersectable]:
        return iter(self.objects)

    def __len__(self) -> int:
        return len(self.objects)

    @classmethod
    def of(cls, objects: Iterable[Intersectable]) -> Scene:
        return cls(objects=tuple(objects))
