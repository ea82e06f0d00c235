from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Protocol

from ..errors import UnknownStrategy
from .comparator import DimensionComparison, FitLabel, LOOSE_LIKE, TIGHT_LIKE


class FitLevel(str, Enum):
    PERFECT = "perfect"
    GOOD = "good"
    LOOSE = "loose"
    TIGHT = "tight"


# Upper bounds on the mean absolute difference (inches)
AVERAGE_BANDS = [
    (0.5, FitLevel.PERFECT),
    (1.5, FitLevel.GOOD),
    (3.0, FitLevel.LOOSE),
]


@dataclass(frozen=True)
class Verdict:
    strategy: str
    fit: str
    contributing: int
    avg_difference: Optional[float] = None


class FitStrategy(Protocol):
    name: str

    def evaluate(self, comparisons: Iterable[DimensionComparison]) -> Verdict:
        ...


class LabelCountStrategy:
    """Counts per-dimension labels; any tight-like label outranks loose-like ones."""

    name = "label"

    def evaluate(self, comparisons: Iterable[DimensionComparison]) -> Verdict:
        labels = [c.fit for c in comparisons]
        total = len(labels)
        if total == 0:
            return Verdict(self.name, FitLabel.REGULAR.value, 0)

        tight = sum(1 for f in labels if f in TIGHT_LIKE)
        loose = sum(1 for f in labels if f in LOOSE_LIKE)
        perfect = sum(1 for f in labels if f == FitLabel.PERFECT)
        regular = sum(1 for f in labels if f == FitLabel.REGULAR)

        if perfect == total:
            fit = FitLabel.PERFECT
        elif perfect + regular == total:
            fit = FitLabel.REGULAR
        elif tight > 0:
            fit = FitLabel.TIGHT
        elif loose > 0:
            fit = FitLabel.LOOSE
        else:
            fit = FitLabel.REGULAR
        return Verdict(self.name, fit.value, total)


class AveragedMagnitudeStrategy:
    """Bands the mean absolute difference; direction is ignored, so mixed
    tight and loose dimensions can average out."""

    name = "average"

    def evaluate(self, comparisons: Iterable[DimensionComparison]) -> Verdict:
        diffs = [c.abs_difference for c in comparisons]
        if not diffs:
            return Verdict(self.name, FitLevel.GOOD.value, 0, 0.0)

        avg = sum(diffs) / len(diffs)
        level = FitLevel.TIGHT
        for limit, band in AVERAGE_BANDS:
            if avg <= limit:
                level = band
                break
        return Verdict(self.name, level.value, len(diffs), avg)


_STRATEGIES: Dict[str, FitStrategy] = {
    LabelCountStrategy.name: LabelCountStrategy(),
    AveragedMagnitudeStrategy.name: AveragedMagnitudeStrategy(),
}


def get_strategy(name: str) -> FitStrategy:
    key = (name or "").strip().lower()
    if key not in _STRATEGIES:
        raise UnknownStrategy(name)
    return _STRATEGIES[key]
