from typing import Any, Dict, Iterable, List, Optional

from .archetypes import ARCHETYPES, normalize_archetype
from .comparator import DimensionComparison, FitLabel, LOOSE_LIKE, TIGHT_LIKE
from .strategies import FitLevel, Verdict


FALLBACK_SUMMARY = "Fit assessment complete."
NO_DATA_NOTE = "No comparable measurements were provided."

SUMMARIES: Dict[str, Dict[str, str]] = {
    "shirt": {
        "Perfect": "This shirt should fit you perfectly! All measurements are within ideal range.",
        "Regular": "This shirt should fit well with a comfortable fit.",
        "Tight": "This shirt may feel tight. Consider sizing up for better comfort.",
        "Loose": "This shirt may feel loose. Consider sizing down for a better fit.",
    },
    "pants": {
        "Perfect": "These pants should fit you perfectly! All measurements are within ideal range.",
        "Regular": "These pants should fit well with a comfortable fit.",
        "Tight": "These pants may feel tight. Consider sizing up for better comfort.",
        "Loose": "These pants may feel loose. Consider sizing down or using a belt.",
    },
    "shorts": {
        "Perfect": "These shorts should fit you perfectly! All measurements are within ideal range.",
        "Regular": "These shorts should fit well with a comfortable fit.",
        "Tight": "These shorts may feel tight. Consider sizing up for better comfort.",
        "Loose": "These shorts may feel loose. Consider sizing down or using a belt.",
    },
    "skirt": {
        "Perfect": "This skirt should fit you perfectly! All measurements are within ideal range.",
        "Regular": "This skirt should fit well with a comfortable fit.",
        "Tight": "This skirt may feel tight. Consider sizing up for better comfort.",
        "Loose": "This skirt may feel loose. Consider sizing down for a better fit.",
    },
    "dress": {
        "Perfect": "This dress should fit you perfectly! All measurements are within ideal range.",
        "Regular": "This dress should fit well with a comfortable fit.",
        "Tight": "This dress may feel tight. Consider sizing up for better comfort.",
        "Loose": "This dress may feel loose. Consider sizing down for a better fit.",
    },
    "jacket": {
        "Perfect": "This jacket should fit you perfectly! All measurements are within ideal range.",
        "Regular": "This jacket should fit well with room for layering.",
        "Tight": "This jacket may feel tight. Consider sizing up, especially if you layer underneath.",
        "Loose": "This jacket may feel loose. Consider sizing down for a better fit.",
    },
}

# (dimension, label) -> phrase; anything missing falls back to a generic phrase
PROBLEM_PHRASES: Dict[tuple, str] = {
    ("chest", FitLabel.TIGHT): "chest is too tight",
    ("chest", FitLabel.LOOSE): "chest is too loose",
    ("bust", FitLabel.TIGHT): "bust is too tight",
    ("bust", FitLabel.LOOSE): "bust is too loose",
    ("waist", FitLabel.TIGHT): "waist is too tight",
    ("waist", FitLabel.LOOSE): "waist is too loose",
    ("hip", FitLabel.TIGHT): "hips are too tight",
    ("hip", FitLabel.LOOSE): "hips are too loose",
    ("shoulder", FitLabel.SHORT): "shoulders are narrow",
    ("shoulder", FitLabel.LONG): "shoulders are wide",
    ("sleeve", FitLabel.SHORT): "sleeves are short",
    ("sleeve", FitLabel.LONG): "sleeves are long",
    ("inseam", FitLabel.SHORT): "length is short",
    ("inseam", FitLabel.LONG): "length is long",
}

SIZE_LADDER = ["XS", "S", "M", "L", "XL", "XXL", "XXXL"]

AVERAGE_ADVICE: Dict[str, List[str]] = {
    FitLevel.PERFECT.value: ["Perfect match! This size should fit you exceptionally well."],
    FitLevel.GOOD.value: ["Good fit! This size should work well for you."],
    FitLevel.LOOSE.value: [
        "Loose fit. Consider sizing down or checking the product description.",
        "This size provides extra room - good if you prefer comfortable fits.",
    ],
    FitLevel.TIGHT.value: [
        "Tight fit. Consider sizing up to ensure comfort.",
        "This might feel restrictive - check return policy if unsure.",
    ],
}


def _phrase(comparison: DimensionComparison) -> str:
    phrase = PROBLEM_PHRASES.get((comparison.dimension, comparison.fit))
    if phrase:
        return phrase
    if comparison.fit in (FitLabel.TIGHT, FitLabel.LOOSE):
        return f"{comparison.dimension} is too {comparison.fit.value.lower()}"
    return f"{comparison.dimension} is {comparison.fit.value.lower()}"


def problem_areas(archetype: str, comparisons: Iterable[DimensionComparison]) -> List[str]:
    by_dim = {c.dimension: c for c in comparisons}
    key = normalize_archetype(archetype)
    order = [d.name for d in ARCHETYPES.get(key, ())]
    # Dimensions outside the archetype keep their input order after the known ones
    order += [name for name in by_dim if name not in order]

    problems = []
    for name in order:
        comp = by_dim.get(name)
        if comp is None or comp.fit in (FitLabel.PERFECT, FitLabel.REGULAR):
            continue
        problems.append(_phrase(comp))
    return problems


def _shoe_summary(comparisons: List[DimensionComparison], fit: str) -> str:
    size = next((c for c in comparisons if c.dimension == "size"), None)
    if size is None:
        return FALLBACK_SUMMARY
    diff = size.difference
    if fit == FitLabel.PERFECT.value:
        return "These shoes should fit you perfectly!"
    if fit == FitLabel.REGULAR.value:
        if diff > 0:
            return "These shoes are slightly larger than your usual size but should still fit comfortably."
        return "These shoes are slightly smaller than your usual size but may work with thin socks."
    if fit == FitLabel.TIGHT.value:
        return f"These shoes are {abs(diff):.1f} size(s) smaller. They will likely be too tight."
    return f"These shoes are {abs(diff):.1f} size(s) larger. They will likely be too loose."


def describe(archetype: str, comparisons: Iterable[DimensionComparison], verdict: Verdict) -> Dict[str, Any]:
    comps = list(comparisons)
    key = normalize_archetype(archetype)

    if key == "shoes":
        summary = _shoe_summary(comps, verdict.fit)
        problems: List[str] = []
    else:
        summary = SUMMARIES.get(key, {}).get(verdict.fit, FALLBACK_SUMMARY)
        problems = problem_areas(key, comps)

    description = summary
    if problems:
        description += " Note: " + ", ".join(problems) + "."
    if verdict.contributing == 0:
        description += " " + NO_DATA_NOTE

    return {"summary": summary, "problem_areas": problems, "description": description}


def size_adjustment(verdict: Verdict) -> Optional[str]:
    if verdict.fit == FitLabel.TIGHT.value:
        return "size up"
    if verdict.fit == FitLabel.LOOSE.value:
        return "size down"
    return None


def suggest_size(comparisons: Iterable[DimensionComparison], current_size: str) -> str:
    """Step one letter size up or down depending on which direction dominates."""
    label = (current_size or "").strip().upper()
    if label not in SIZE_LADDER:
        return current_size

    comps = list(comparisons)
    tight = sum(1 for c in comps if c.fit in TIGHT_LIKE)
    loose = sum(1 for c in comps if c.fit in LOOSE_LIKE)
    idx = SIZE_LADDER.index(label)
    step = 1 if tight > loose else -1 if loose > tight else 0
    new_idx = idx + step
    # No size beyond either end of the ladder; keep the caller's label as given
    if step == 0 or not 0 <= new_idx < len(SIZE_LADDER):
        return current_size
    return SIZE_LADDER[new_idx]


def recommendations(verdict: Verdict) -> List[str]:
    recs = list(AVERAGE_ADVICE.get(verdict.fit, []))
    avg = verdict.avg_difference or 0.0
    if verdict.contributing == 0:
        return [NO_DATA_NOTE]
    if verdict.fit == FitLevel.PERFECT.value and avg < 0.3:
        recs.append("This is nearly a custom-tailored fit.")
    elif verdict.fit == FitLevel.GOOD.value and avg > 1.0:
        recs.append("There might be slight room for adjustment.")
    return recs
