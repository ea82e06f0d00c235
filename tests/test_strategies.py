import itertools

import pytest
from perfectfit.errors import UnknownArchetype, UnknownStrategy
from perfectfit.services.archetypes import DRESS_BUST_PROXY, analyzer_dimensions_for, archetype_names, dimensions_for
from perfectfit.services.comparator import compare
from perfectfit.services.strategies import AveragedMagnitudeStrategy, LabelCountStrategy, get_strategy


label = LabelCountStrategy()
average = AveragedMagnitudeStrategy()


def _comps(*pairs):
    # (user, garment, dimension)
    return [compare(u, g, d) for u, g, d in pairs]


def test_all_perfect():
    v = label.evaluate(_comps((40, 40.5, "chest"), (18, 18, "shoulder")))
    assert v.fit == "Perfect"
    assert v.contributing == 2


def test_perfect_and_regular_is_regular():
    v = label.evaluate(_comps((40, 40.5, "chest"), (34, 35.5, "sleeve")))
    assert v.fit == "Regular"


def test_loose_only():
    assert label.evaluate(_comps((34, 38, "waist"), (41, 42, "hip"))).fit == "Loose"


def test_long_counts_as_loose():
    assert label.evaluate(_comps((32, 35, "inseam"))).fit == "Loose"


def test_tight_beats_loose():
    comps = _comps((34, 38, "waist"), (41, 38, "hip"), (32, 32, "inseam"))
    assert label.evaluate(comps).fit == "Tight"


def test_short_beats_long():
    comps = _comps((18, 21, "shoulder"), (34, 31, "sleeve"))
    assert label.evaluate(comps).fit == "Tight"


def test_label_strategy_is_order_independent():
    comps = _comps((34, 38, "waist"), (41, 38, "hip"), (32, 32, "inseam"), (40, 41.5, "chest"))
    verdicts = {label.evaluate(list(p)).fit for p in itertools.permutations(comps)}
    assert verdicts == {"Tight"}


def test_empty_label_aggregation_is_neutral():
    v = label.evaluate([])
    assert v.fit == "Regular"
    assert v.contributing == 0


@pytest.mark.parametrize("diffs,expected", [
    ([0.0, 0.5], "perfect"),
    ([1.0, 2.0], "good"),
    ([3.0, 3.0], "loose"),
    ([4.0, 2.5], "tight"),
])
def test_average_bands(diffs, expected):
    comps = [compare(40, 40 + d, "chest") for d in diffs]
    assert average.evaluate(comps).fit == expected


def test_average_is_order_independent():
    comps = _comps((40, 44, "chest"), (18, 17, "shoulder"), (34, 34.2, "sleeve"))
    results = {average.evaluate(list(p)).avg_difference for p in itertools.permutations(comps)}
    assert len({round(r, 9) for r in results}) == 1


def test_empty_average_aggregation():
    v = average.evaluate([])
    assert v.fit == "good"
    assert v.avg_difference == 0.0
    assert v.contributing == 0


def test_strategies_diverge_on_mixed_directions():
    comps = _comps((40, 42, "chest"), (32, 30, "waist"))
    assert average.evaluate(comps).fit == "loose"
    assert average.evaluate(comps).avg_difference == pytest.approx(2.0)
    assert label.evaluate(comps).fit == "Regular"


def test_get_strategy():
    assert get_strategy("label").name == "label"
    assert get_strategy(" Average ").name == "average"
    with pytest.raises(UnknownStrategy):
        get_strategy("median")


def test_archetype_table():
    assert [d.name for d in dimensions_for("shirt")] == ["chest", "shoulder", "sleeve"]
    assert [d.name for d in dimensions_for("Pants ")] == ["waist", "hip", "inseam"]
    assert [d.name for d in dimensions_for("shoes")] == ["size"]
    assert set(archetype_names()) == {"shirt", "pants", "shorts", "skirt", "dress", "jacket", "shoes"}


def test_dress_bust_reads_user_chest():
    dress = dimensions_for("dress")
    assert dress[0] is DRESS_BUST_PROXY
    assert DRESS_BUST_PROXY.user_key == "chest"


def test_unknown_archetype():
    with pytest.raises(UnknownArchetype):
        dimensions_for("hat")


def test_analyzer_dimensions():
    assert [d.name for d in analyzer_dimensions_for(" Shoes")] == ["foot_length"]
    assert analyzer_dimensions_for("shirt") == dimensions_for("shirt")
    with pytest.raises(UnknownArchetype):
        analyzer_dimensions_for("poncho")
