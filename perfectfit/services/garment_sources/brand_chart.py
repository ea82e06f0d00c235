import re
from typing import Dict

import structlog

from .base import GarmentSource


logger = structlog.get_logger("perfectfit.sources")

_FIELDS = ("chest", "waist", "hip", "shoulder", "sleeve", "inseam")


def _row(*values: float) -> Dict[str, float]:
    return dict(zip(_FIELDS, (float(v) for v in values)))


# Published size charts, inches; 0 = dimension not listed for that brand.
#                      chest  waist  hip   shoulder sleeve inseam
BRAND_CHARTS: Dict[str, Dict[str, Dict[str, float]]] = {
    "nike": {
        "S": _row(38, 30, 0, 0, 0, 0),
        "M": _row(41, 32.5, 0, 0, 0, 0),
        "L": _row(44, 35, 0, 0, 0, 0),
        "XL": _row(48, 38.5, 0, 0, 0, 0),
    },
    "zara": {
        "XS": _row(39.4, 33.9, 39.4, 17.3, 25.2, 0),
        "S": _row(40.9, 35.4, 40.9, 17.7, 25.6, 0),
        "M": _row(42.5, 37.0, 42.5, 18.1, 26.0, 0),
        "L": _row(45.3, 39.8, 45.3, 18.7, 26.6, 0),
    },
    "hm": {
        "XS": _row(33.9, 26.8, 36.2, 14.6, 23.2, 30.7),
        "S": _row(35.4, 28.3, 37.8, 15.0, 23.6, 31.1),
        "M": _row(37.0, 29.9, 39.4, 15.4, 24.0, 31.5),
        "L": _row(39.8, 32.7, 42.1, 16.1, 24.4, 31.9),
        "XL": _row(42.9, 35.8, 45.3, 17.1, 24.8, 32.3),
    },
    "levi": {
        "28W X 30L": _row(0, 28, 0, 0, 0, 30),
        "29W X 30L": _row(0, 29, 0, 0, 0, 30),
        "30W X 30L": _row(0, 30, 0, 0, 0, 30),
        "31W X 30L": _row(0, 31, 0, 0, 0, 30),
        "32W X 32L": _row(0, 32, 0, 0, 0, 32),
        "33W X 32L": _row(0, 33, 0, 0, 0, 32),
        "34W X 32L": _row(0, 34, 0, 0, 0, 32),
        "36W X 34L": _row(0, 36, 0, 0, 0, 34),
    },
}


def normalize_size_label(label: str) -> str:
    s = re.sub(r"\s+", " ", (label or "").strip().upper())
    # "32Wx32L", "32W X 32L" and "32w x 32l" are the same waist/length label
    return re.sub(r"^(\d+W)\s*X\s*(\d+L)$", r"\1 X \2", s)


class BrandChartSource:
    """Looks sizes up in a brand chart, delegating misses to ``fallback``."""

    def __init__(self, brand: str, fallback: GarmentSource) -> None:
        self.brand = brand
        self.chart = BRAND_CHARTS.get(brand, {})
        self.fallback = fallback

    def lookup(self, size_label: str) -> Dict[str, float] | None:
        row = self.chart.get(normalize_size_label(size_label))
        return dict(row) if row is not None else None

    def measurements(self, size_label: str, archetype: str) -> Dict[str, float]:
        row = self.lookup(size_label)
        if row is not None:
            return row
        logger.info("garment_mock_fallback", brand=self.brand, size_label=size_label)
        return self.fallback.measurements(size_label, archetype)
