from dataclasses import dataclass
from typing import Tuple

from memory_match.constants import DEFAULT_IMAGES


@dataclass(slots=True)
class ImageCatalog:
    """Ordered list of opaque image identifiers stored on a single registry entity.

    The last entry is reserved as the singleton image placed on odd boards, so
    only the first ``count - 1`` entries are available for pairs.
    """
    images: Tuple[str, ...] = DEFAULT_IMAGES

    def __post_init__(self) -> None:
        self.images = tuple(self.images)

    @property
    def count(self) -> int:
        return len(self.images)

    @property
    def singleton(self) -> str:
        return self.images[-1]

    @property
    def pairable(self) -> Tuple[str, ...]:
        return self.images[:-1]
