from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple, List

from tilematch.constants import MIN_SPAWNABLE_TYPES

@dataclass(slots=True)
class TileTypes:
    """Canonical tile type definitions stored on a single entity.

    This component lives alongside TileTypeRegistry (tag) and provides mapping utilities.
    ``types`` maps a type name to its display colour; ``symbols`` holds an optional
    glyph per type for text front-ends. Generation and refill only draw from ``spawnable``.
    """
    types: Dict[str, Tuple[int,int,int]]
    spawnable: List[str] = field(default_factory=list)
    symbols: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.types:
            raise ValueError("TileTypes requires at least one type")
        self.set_spawnable(self.spawnable or list(self.types.keys()))

    def symbol_for(self, type_name: str) -> str:
        return self.symbols.get(type_name, type_name[:1].upper())

    def spawnable_types(self) -> List[str]:
        return list(self.spawnable)

    def set_spawnable(self, type_names: Iterable[str]) -> None:
        # Preserve order while filtering unknown types.
        seen: set[str] = set()
        filtered: List[str] = []
        for name in type_names:
            if name in self.types and name not in seen:
                filtered.append(name)
                seen.add(name)
        if len(filtered) < MIN_SPAWNABLE_TYPES:
            raise ValueError(f"need at least {MIN_SPAWNABLE_TYPES} known spawnable types, got {filtered!r}")
        self.spawnable = filtered
