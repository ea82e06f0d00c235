import random
from typing import Dict, Tuple

import structlog

from ..archetypes import normalize_archetype


logger = structlog.get_logger("perfectfit.sources")

# archetype -> dimension -> (base, span); value = base + rng.random() * span.
# Synthetic stand-ins for real garment data, not reference sizes.
MOCK_RANGES: Dict[str, Dict[str, Tuple[float, float]]] = {
    "shirt": {"chest": (40, 8), "waist": (32, 8), "shoulder": (16, 4), "sleeve": (32, 4)},
    "pants": {"waist": (30, 8), "hip": (38, 6), "inseam": (30, 4)},
    "shorts": {"waist": (30, 8), "hip": (38, 6), "inseam": (5, 4)},
    "skirt": {"waist": (26, 8), "hip": (36, 8)},
    "dress": {"bust": (32, 8), "waist": (26, 8), "hip": (36, 8)},
    "jacket": {"chest": (40, 8), "shoulder": (17, 4), "sleeve": (33, 4)},
    "shoes": {"size": (7, 5), "foot_length": (10, 2)},
}


class MockGarmentSource:
    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def measurements(self, size_label: str, archetype: str) -> Dict[str, float]:
        key = normalize_archetype(archetype)
        ranges = MOCK_RANGES.get(key, MOCK_RANGES["shirt"])
        logger.info("garment_mock_generated", archetype=key, size_label=size_label)
        return {dim: base + self.rng.random() * span for dim, (base, span) in ranges.items()}
