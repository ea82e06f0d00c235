import math
import random
from typing import Any, Dict, List, Mapping, Tuple

import structlog

from .comparator import is_comparable


logger = structlog.get_logger("perfectfit.sizes")

# Brand offsets applied to the user's base measurement before bucketing
SHIRT_BRANDS: List[Tuple[str, float]] = [("H&M", 0.0), ("Zara", -1.5), ("Uniqlo", 0.0), ("Nike", 1.0)]
PANTS_BRANDS: List[Tuple[str, float]] = [("Levi's", 0.0), ("Gap", 0.0), ("Old Navy", -0.5), ("ASOS", 0.5)]
SHOE_BRANDS: List[Tuple[str, float]] = [("Nike", 0.0), ("Adidas", 0.0), ("Puma", 0.0), ("New Balance", -0.5)]

# Brand-to-brand variance, uniform in [-JITTER, JITTER)
JITTER = 2.0


def shirt_size(chest: float) -> Tuple[str, str]:
    if chest < 36:
        return "XS", "UK 6 / US 2"
    if chest < 38:
        return "S", "UK 8 / US 4"
    if chest < 40:
        return "M", "UK 10 / US 6"
    if chest < 42:
        return "L", "UK 12 / US 8"
    if chest < 44:
        return "XL", "UK 14 / US 10"
    return "XXL", "UK 16 / US 12"


def pants_size(waist: float) -> Tuple[str, str]:
    w = math.floor(waist)
    if w < 28:
        return f"{w}W x 30L", "UK 6 / US 2"
    if w < 30:
        return f"{w}W x 32L", "UK 8 / US 4"
    if w < 32:
        return f"{w}W x 32L", "UK 10 / US 6"
    if w < 34:
        return f"{w}W x 34L", "UK 12 / US 8"
    return f"{w}W x 34L", "UK 14 / US 10"


def _fmt(n: float) -> str:
    return f"{n:g}"


def shoe_size(us_size: float) -> Tuple[str, str]:
    # Rough US -> UK / EU conversion
    return f"US {_fmt(us_size)}", f"UK {_fmt(us_size - 1)} / EU {_fmt(us_size + 33)}"


def estimate_shoe_size(height_in: float) -> float:
    if height_in < 64:
        return 8.0
    if height_in < 67:
        return 8.5
    if height_in < 70:
        return 9.0
    if height_in < 73:
        return 9.5
    return 10.0


def confidence(variance: float, rng: random.Random) -> float:
    v = abs(variance)
    if v < 1:
        return 96 + rng.random() * 4
    if v < 2:
        return 93 + rng.random() * 3
    return 90 + rng.random() * 3


def _assign(brands: List[Tuple[str, float]], base: float, bucket, rng: random.Random, jitter: bool) -> List[Dict[str, Any]]:
    items = []
    for brand, offset in brands:
        variance = (rng.random() - 0.5) * 2 * JITTER if jitter else 0.0
        size, detail = bucket(base + offset + variance)
        items.append({
            "brand": brand,
            "size": size,
            "detail": detail,
            "confidence": round(confidence(variance, rng), 1),
        })
    return items


def recommend_sizes(profile: Mapping[str, float], rng: random.Random | None = None, jitter: bool = True) -> Dict[str, List[Dict[str, Any]]]:
    """Bucket a measurement profile into per-brand shirt, pants and shoe sizes.

    ``profile`` uses canonical keys in inches. Categories whose base
    measurement is missing are left out. Shoe sizes are not jittered.
    """
    rng = rng or random.Random()
    out: Dict[str, List[Dict[str, Any]]] = {}

    chest = profile.get("chest")
    if is_comparable(chest):
        out["shirt"] = _assign(SHIRT_BRANDS, chest, shirt_size, rng, jitter)

    waist = profile.get("waist")
    if is_comparable(waist):
        out["pants"] = _assign(PANTS_BRANDS, waist, pants_size, rng, jitter)

    base_shoe = profile.get("shoe_size")
    if not is_comparable(base_shoe) and is_comparable(profile.get("height")):
        base_shoe = estimate_shoe_size(profile["height"])
    if is_comparable(base_shoe):
        out["shoes"] = _assign(SHOE_BRANDS, base_shoe, shoe_size, rng, jitter=False)

    logger.info("sizes_recommended", categories=list(out))
    return out
