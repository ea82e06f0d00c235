import math
import re
from typing import Any, Dict, List, Mapping, Tuple

import structlog

from .archetypes import DimensionSpec, analyzer_dimensions_for, dimensions_for, normalize_archetype
from .comparator import DimensionComparison, compare, grade_severity, is_comparable
from .describer import describe, recommendations, size_adjustment, suggest_size
from .strategies import AveragedMagnitudeStrategy, FitStrategy, LabelCountStrategy, Verdict


logger = structlog.get_logger("perfectfit.calculator")

CM_PER_INCH = 2.54

KEY_ALIASES = {
    "hips": "hip",
    "shoulders": "shoulder",
    "shoulder_width": "shoulder",
    "shoulder_to_shoulder": "shoulder",
    "sleeve_length": "sleeve",
    "shoesize": "shoe_size",
    "footlength": "foot_length",
}

# Size-unit fields, never converted between cm and inches
UNITLESS_KEYS = {"size", "shoe_size"}

_CAMEL = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _fold_key(key: str) -> str:
    k = _CAMEL.sub("_", str(key).strip())
    return k.replace("-", "_").replace(" ", "_").lower()


def normalize_key(key: str) -> str:
    k = _fold_key(key)
    return KEY_ALIASES.get(k, k)


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def normalize_unit(unit: str | None) -> str:
    u = (unit or "inch").strip().lower()
    if u in ("cm", "cms", "centimeter", "centimeters", "centimetre", "centimetres"):
        return "cm"
    return "inch"


def normalize_record(record: Mapping[str, Any] | None, unit: str | None = "inch") -> Dict[str, float]:
    """Fold a loosely-shaped measurement record into canonical keys, in inches.

    Non-numeric entries (timestamps, gender, brand, size labels) are dropped.
    Zero and negative values are kept here and filtered at comparison time.
    """
    out: Dict[str, float] = {}
    if not record:
        return out
    to_inches = normalize_unit(unit) == "cm"
    for raw_key, raw_value in record.items():
        value = _to_float(raw_value)
        if value is None:
            continue
        folded = _fold_key(raw_key)
        is_alias = folded in KEY_ALIASES
        key = KEY_ALIASES.get(folded, folded)
        if to_inches and key not in UNITLESS_KEYS:
            value = value / CM_PER_INCH
        # An explicit canonical key beats an alias for the same dimension
        if key in out and is_alias:
            continue
        out[key] = value
    return out


def _garment_value(garment: Mapping[str, float], spec: DimensionSpec) -> float | None:
    for key in spec.garment_keys:
        value = garment.get(key)
        if is_comparable(value):
            return value
    return None


def compare_records(
    user: Mapping[str, float],
    garment: Mapping[str, float],
    archetype: str,
    dimensions: Tuple[DimensionSpec, ...] | None = None,
) -> Dict[str, DimensionComparison]:
    """Compare every archetype dimension both records can supply, in archetype order."""
    out: Dict[str, DimensionComparison] = {}
    for spec in dimensions or dimensions_for(archetype):
        comparison = compare(user.get(spec.user_key), _garment_value(garment, spec), spec.name, spec.kind)
        if comparison is None:
            logger.debug("dimension_skipped", archetype=archetype, dimension=spec.name)
            continue
        out[spec.name] = comparison
    return out


def evaluate(
    user_measurements: Mapping[str, Any],
    garment_measurements: Mapping[str, Any],
    archetype: str,
    strategy: FitStrategy,
    unit: str | None = "inch",
    garment_unit: str | None = None,
) -> Tuple[Dict[str, DimensionComparison], Verdict]:
    user = normalize_record(user_measurements, unit)
    garment = normalize_record(garment_measurements, garment_unit or unit)
    comparisons = compare_records(user, garment, archetype)
    return comparisons, strategy.evaluate(comparisons.values())


def calculate_fit(
    user_measurements: Mapping[str, Any],
    garment_measurements: Mapping[str, Any],
    archetype: str,
    unit: str | None = "inch",
    current_size: str | None = None,
    garment_unit: str | None = None,
) -> Dict[str, Any]:
    """Label-count fit calculation. Raises UnknownArchetype for unknown garment types."""
    strategy = LabelCountStrategy()
    comparisons, verdict = evaluate(user_measurements, garment_measurements, archetype, strategy, unit, garment_unit)
    text = describe(archetype, comparisons.values(), verdict)

    logger.info(
        "fit_calculated",
        archetype=normalize_archetype(archetype),
        strategy=verdict.strategy,
        overall_fit=verdict.fit,
        contributing=verdict.contributing,
    )

    return {
        "garment_type": normalize_archetype(archetype),
        "strategy": verdict.strategy,
        "overall_fit": verdict.fit,
        "description": text["description"],
        "summary": text["summary"],
        "problem_areas": text["problem_areas"],
        "size_adjustment": size_adjustment(verdict),
        "suggested_size": suggest_size(comparisons.values(), current_size) if current_size else None,
        "contributing_dimensions": verdict.contributing,
        "measurements": {name: c.to_dict() for name, c in comparisons.items()},
    }


def _severity_details(user: Mapping[str, float], garment: Mapping[str, float]) -> Dict[str, Dict[str, Any]]:
    details: Dict[str, Dict[str, Any]] = {}
    for measure, user_val in user.items():
        prod_val = garment.get(measure)
        if not (is_comparable(user_val) and is_comparable(prod_val)):
            continue
        diff = prod_val - user_val
        details[measure] = {
            "user": user_val,
            "product": prod_val,
            "difference": diff,
            "status": grade_severity(abs(diff)).value,
        }
    return details


def analyze_fit(
    user_measurements: Mapping[str, Any],
    garment_measurements: Mapping[str, Any],
    archetype: str,
    unit: str | None = "inch",
    garment_unit: str | None = None,
) -> Dict[str, Any]:
    """Averaged-magnitude analysis. Raises UnknownArchetype for unknown garment types.

    ``details`` grades every measurement the two records share, relevant to
    the archetype or not; ``overall`` only uses the archetype's dimensions.
    """
    strategy = AveragedMagnitudeStrategy()
    user = normalize_record(user_measurements, unit)
    garment = normalize_record(garment_measurements, garment_unit or unit)
    comparisons = compare_records(user, garment, archetype, analyzer_dimensions_for(archetype))
    verdict = strategy.evaluate(comparisons.values())

    differences: List[Dict[str, Any]] = [
        {"measure": c.dimension, "difference": c.difference, "absolute": c.abs_difference}
        for c in comparisons.values()
    ]

    logger.info(
        "fit_analyzed",
        archetype=normalize_archetype(archetype),
        strategy=verdict.strategy,
        fit_level=verdict.fit,
        avg_difference=verdict.avg_difference,
    )

    return {
        "garment_type": normalize_archetype(archetype),
        "strategy": verdict.strategy,
        "overall": {
            "fit_level": verdict.fit,
            "avg_difference": verdict.avg_difference,
            "differences": differences,
        },
        "details": _severity_details(user, garment),
        "recommendations": recommendations(verdict),
    }
