import random
from typing import Dict

from .base import GarmentSource
from .brand_chart import BRAND_CHARTS, BrandChartSource
from .mock import MockGarmentSource


# Substrings of a brand name or product URL that identify a chart
BRAND_PATTERNS = {
    "nike": ("nike.com", "nike"),
    "zara": ("zara.com", "zara"),
    "hm": ("hm.com", "h&m.com", "h&m"),
    "levi": ("levi.com", "levi's", "levis", "levi"),
}


def detect_brand(source: str | None) -> str | None:
    s = (source or "").strip().lower()
    if not s:
        return None
    if s in BRAND_CHARTS:
        return s
    for brand, patterns in BRAND_PATTERNS.items():
        if any(p in s for p in patterns):
            return brand
    return None


def get_source(source: str | None, rng: random.Random | None = None) -> GarmentSource:
    mock = MockGarmentSource(rng)
    brand = detect_brand(source)
    if brand is None:
        # Amazon and unknown retailers have no usable chart
        return mock
    return BrandChartSource(brand, fallback=mock)


def resolve_garment_measurements(source: str | None, size_label: str, archetype: str, rng: random.Random | None = None) -> Dict[str, float]:
    return get_source(source, rng).measurements(size_label, archetype)
