import math
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class FitLabel(str, Enum):
    PERFECT = "Perfect"
    REGULAR = "Regular"
    TIGHT = "Tight"
    LOOSE = "Loose"
    SHORT = "Short"
    LONG = "Long"


class Severity(str, Enum):
    PERFECT = "perfect"
    SLIGHT = "slight"
    MODERATE = "moderate"
    SIGNIFICANT = "significant"


class DimensionKind(str, Enum):
    GIRTH = "girth"
    LENGTH = "length"
    SHOE = "shoe"


# Tolerances in inches
TOLERANCE = {
    "perfect": 1.0,
    "regular": 2.0,
}

# Shoe sizes are compared in size units with a tighter band
SHOE_TOLERANCE = {
    "perfect": 0.5,
    "regular": 1.0,
}

SEVERITY_BANDS = [
    (0.5, Severity.PERFECT),
    (1.0, Severity.SLIGHT),
    (2.0, Severity.MODERATE),
]

GIRTH_DIMENSIONS = {"chest", "bust", "waist", "hip"}
SHOE_DIMENSIONS = {"size"}

TIGHT_LIKE = {FitLabel.TIGHT, FitLabel.SHORT}
LOOSE_LIKE = {FitLabel.LOOSE, FitLabel.LONG}


@dataclass(frozen=True)
class DimensionComparison:
    dimension: str
    user: float
    garment: float
    difference: float
    abs_difference: float
    fit: FitLabel
    kind: DimensionKind

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["fit"] = self.fit.value
        out["kind"] = self.kind.value
        return out


def kind_for(dimension: str) -> DimensionKind:
    if dimension in GIRTH_DIMENSIONS:
        return DimensionKind.GIRTH
    if dimension in SHOE_DIMENSIONS:
        return DimensionKind.SHOE
    return DimensionKind.LENGTH


def is_comparable(value: Any) -> bool:
    """A value takes part in a comparison only if it is a finite number above zero."""
    if value is None or isinstance(value, bool):
        return False
    if not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def _directional(difference: float, kind: DimensionKind) -> FitLabel:
    if kind == DimensionKind.LENGTH:
        return FitLabel.LONG if difference > 0 else FitLabel.SHORT
    return FitLabel.LOOSE if difference > 0 else FitLabel.TIGHT


def classify(difference: float, kind: DimensionKind) -> FitLabel:
    abs_diff = abs(difference)
    bands = SHOE_TOLERANCE if kind == DimensionKind.SHOE else TOLERANCE
    if abs_diff <= bands["perfect"]:
        return FitLabel.PERFECT
    if abs_diff <= bands["regular"]:
        return FitLabel.REGULAR
    return _directional(difference, kind)


def compare(
    user_value: Any,
    garment_value: Any,
    dimension: str,
    kind: Optional[DimensionKind] = None,
) -> Optional[DimensionComparison]:
    """Compare one body measurement against the matching garment measurement.

    Returns ``None`` when either side is missing or not a positive number, so
    callers can drop the dimension from details and aggregation alike.
    """
    if not (is_comparable(user_value) and is_comparable(garment_value)):
        return None

    kind = kind or kind_for(dimension)
    user_f = float(user_value)
    garment_f = float(garment_value)
    difference = garment_f - user_f
    return DimensionComparison(
        dimension=dimension,
        user=user_f,
        garment=garment_f,
        difference=difference,
        abs_difference=abs(difference),
        fit=classify(difference, kind),
        kind=kind,
    )


def compare_shoe_size(user_size: Any, garment_size: Any) -> Optional[DimensionComparison]:
    return compare(user_size, garment_size, "size", DimensionKind.SHOE)


def grade_severity(abs_difference: float) -> Severity:
    for limit, severity in SEVERITY_BANDS:
        if abs_difference <= limit:
            return severity
    return Severity.SIGNIFICANT
