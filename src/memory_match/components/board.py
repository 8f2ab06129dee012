from dataclasses import dataclass

@dataclass(slots=True)
class Board:
    """Square board shape; tiles live on their own entities."""
    columns: int

    @property
    def size(self) -> int:
        return self.columns * self.columns
