from dataclasses import dataclass

@dataclass(slots=True)
class TileTypeRegistry:
    """Tag component marking the singleton entity that owns TileTypes."""
    pass
