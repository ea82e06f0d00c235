from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from ..errors import UnknownArchetype
from .comparator import DimensionKind


@dataclass(frozen=True)
class DimensionSpec:
    name: str
    kind: DimensionKind
    # Key read from the user's record
    user_key: str
    # Keys read from the garment record, first usable value wins
    garment_keys: Tuple[str, ...]


def _dim(name: str, kind: DimensionKind, user_key: str | None = None, garment_keys: Tuple[str, ...] | None = None) -> DimensionSpec:
    return DimensionSpec(name=name, kind=kind, user_key=user_key or name, garment_keys=garment_keys or (name,))


GIRTH = DimensionKind.GIRTH
LENGTH = DimensionKind.LENGTH

# Users are not asked for a bust measurement, so a dress bust is compared
# against their chest. This is a sizing judgment, not an identity.
DRESS_BUST_PROXY = _dim("bust", GIRTH, user_key="chest", garment_keys=("bust", "chest"))

ARCHETYPES: Dict[str, Tuple[DimensionSpec, ...]] = {
    "shirt": (_dim("chest", GIRTH), _dim("shoulder", LENGTH), _dim("sleeve", LENGTH)),
    "pants": (_dim("waist", GIRTH), _dim("hip", GIRTH), _dim("inseam", LENGTH)),
    "shorts": (_dim("waist", GIRTH), _dim("inseam", LENGTH)),
    "skirt": (_dim("waist", GIRTH), _dim("hip", GIRTH)),
    "dress": (DRESS_BUST_PROXY, _dim("waist", GIRTH), _dim("hip", GIRTH)),
    "jacket": (_dim("chest", GIRTH), _dim("shoulder", LENGTH), _dim("sleeve", LENGTH)),
    "shoes": (_dim("size", DimensionKind.SHOE, user_key="shoe_size"),),
}

# The averaged analyzer judges shoes on foot length in inches, not on size units
ANALYZER_OVERRIDES: Dict[str, Tuple[DimensionSpec, ...]] = {
    "shoes": (_dim("foot_length", LENGTH),),
}


def normalize_archetype(archetype: str) -> str:
    return (archetype or "").strip().lower()


def dimensions_for(archetype: str) -> Tuple[DimensionSpec, ...]:
    key = normalize_archetype(archetype)
    if key not in ARCHETYPES:
        raise UnknownArchetype(archetype)
    return ARCHETYPES[key]


def archetype_names() -> List[str]:
    return list(ARCHETYPES)


def describe_table() -> Dict[str, List[Dict[str, Any]]]:
    return {
        name: [
            {"name": d.name, "kind": d.kind.value, "user_key": d.user_key, "garment_keys": list(d.garment_keys)}
            for d in dims
        ]
        for name, dims in ARCHETYPES.items()
    }


def analyzer_dimensions_for(archetype: str) -> Tuple[DimensionSpec, ...]:
    dims = dimensions_for(archetype)
    return ANALYZER_OVERRIDES.get(normalize_archetype(archetype), dims)
