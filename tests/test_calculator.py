import pytest
from perfectfit.errors import UnknownArchetype
from perfectfit.services.calculator import analyze_fit, calculate_fit, evaluate, normalize_key, normalize_record
from perfectfit.services.strategies import get_strategy


def test_shirt_all_within_tolerance():
    user = {"chest": 42, "shoulder": 18, "sleeve": 34}
    garment = {"chest": 41, "shoulder": 18.2, "sleeve": 34.5}
    res = calculate_fit(user, garment, "shirt")
    assert res["overall_fit"] == "Perfect"
    assert res["strategy"] == "label"
    assert res["problem_areas"] == []
    assert "Note:" not in res["description"]
    assert res["description"].startswith("This shirt should fit you perfectly!")
    assert res["size_adjustment"] is None
    assert list(res["measurements"]) == ["chest", "shoulder", "sleeve"]


def test_pants_loose_waist():
    user = {"waist": 34, "hip": 41, "inseam": 32}
    garment = {"waist": 38, "hip": 42, "inseam": 30}
    res = calculate_fit(user, garment, "pants")
    m = res["measurements"]
    assert m["waist"]["fit"] == "Loose"
    assert m["hip"]["fit"] == "Perfect"
    assert m["inseam"]["fit"] == "Regular"
    assert res["overall_fit"] == "Loose"
    assert res["problem_areas"] == ["waist is too loose"]
    assert "waist is too loose" in res["description"]
    assert res["size_adjustment"] == "size down"


def test_problem_areas_follow_archetype_order():
    user = {"sleeve": 34, "shoulder": 18, "chest": 42}
    garment = {"sleeve": 37, "shoulder": 15, "chest": 38}
    res = calculate_fit(user, garment, "shirt")
    assert res["overall_fit"] == "Tight"
    assert res["problem_areas"] == ["chest is too tight", "shoulders are narrow", "sleeves are long"]
    assert res["description"].endswith("Note: chest is too tight, shoulders are narrow, sleeves are long.")
    assert res["size_adjustment"] == "size up"


def test_missing_dimensions_are_skipped():
    user = {"chest": 42, "shoulder": 0, "sleeve": None}
    garment = {"chest": 45, "shoulder": 18, "sleeve": "n/a"}
    res = calculate_fit(user, garment, "shirt")
    assert list(res["measurements"]) == ["chest"]
    assert res["contributing_dimensions"] == 1
    assert res["overall_fit"] == "Loose"


def test_nothing_comparable_gives_neutral_result():
    res = calculate_fit({"chest": 42}, {"waist": 30}, "pants")
    assert res["overall_fit"] == "Regular"
    assert res["measurements"] == {}
    assert res["contributing_dimensions"] == 0
    assert "No comparable measurements" in res["description"]


def test_dress_bust_uses_user_chest():
    user = {"chest": 36, "waist": 30, "hip": 40}
    garment = {"bust": 33, "waist": 30, "hip": 40}
    res = calculate_fit(user, garment, "dress")
    assert res["measurements"]["bust"]["user"] == 36
    assert res["overall_fit"] == "Tight"
    assert res["problem_areas"] == ["bust is too tight"]


@pytest.mark.parametrize("garment_size,expected", [(9, "Perfect"), (10.2, "Loose"), (7.5, "Tight")])
def test_shoes(garment_size, expected):
    res = calculate_fit({"shoeSize": 9}, {"size": garment_size}, "shoes")
    assert res["overall_fit"] == expected


def test_shoe_descriptions():
    assert calculate_fit({"shoe_size": 9}, {"size": 7.5}, "shoes")["description"] == (
        "These shoes are 1.5 size(s) smaller. They will likely be too tight."
    )
    assert "slightly larger" in calculate_fit({"shoe_size": 9}, {"size": 10}, "shoes")["description"]


def test_unknown_archetype_is_rejected():
    with pytest.raises(UnknownArchetype):
        calculate_fit({"chest": 40}, {"chest": 40}, "hat")
    with pytest.raises(UnknownArchetype):
        analyze_fit({"chest": 40}, {"chest": 40}, "hat")


def test_centimetre_records():
    user = {"chest": 101.6, "shoulder": 45.72, "sleeve": 86.36}
    garment = {"chest": 40, "shoulder": 18, "sleeve": 34}
    res = calculate_fit(user, garment, "shirt", unit="cm", garment_unit="inch")
    assert res["overall_fit"] == "Perfect"
    assert res["measurements"]["chest"]["user"] == pytest.approx(40.0)


def test_suggested_size():
    user = {"chest": 42, "shoulder": 18, "sleeve": 34}
    garment = {"chest": 38, "shoulder": 18, "sleeve": 34}
    res = calculate_fit(user, garment, "shirt", current_size="m")
    assert res["suggested_size"] == "L"
    assert calculate_fit(user, user, "shirt", current_size="M")["suggested_size"] == "M"
    assert calculate_fit(user, user, "shirt")["suggested_size"] is None


def test_normalize_record():
    rec = normalize_record({"Hips": "40", "shoulders": 18, "shoeSize": 9, "gender": "female", "timestamp": "2024-01-01", "flag": True})
    assert rec == {"hip": 40.0, "shoulder": 18.0, "shoe_size": 9.0}


def test_canonical_key_wins_over_alias():
    assert normalize_record({"hip": 40, "hips": 44}) == {"hip": 40.0}


def test_cm_conversion_leaves_shoe_size():
    rec = normalize_record({"waist": 76.2, "shoe_size": 9}, "cm")
    assert rec["waist"] == pytest.approx(30.0)
    assert rec["shoe_size"] == 9.0


def test_normalize_key():
    assert normalize_key("footLength") == "foot_length"
    assert normalize_key("shoulder_width") == "shoulder"
    assert normalize_key(" Sleeve-Length ") == "sleeve"


def test_analyze_fit_bands_and_details():
    user = {"chest": 40, "waist": 32, "hips": 38, "shoulders": 17, "sleeve": 33, "inseam": 0}
    garment = {"chest": 41, "waist": 35, "hips": 0, "shoulders": 17.5, "sleeve": 33.2, "inseam": 0}
    res = analyze_fit(user, garment, "shirt")
    overall = res["overall"]
    assert res["strategy"] == "average"
    # chest 1.0, shoulder 0.5, sleeve 0.2
    assert overall["avg_difference"] == pytest.approx(1.7 / 3)
    assert overall["fit_level"] == "good"
    assert [d["measure"] for d in overall["differences"]] == ["chest", "shoulder", "sleeve"]
    # details include waist even though shirts aren't judged on it
    assert res["details"]["waist"]["status"] == "significant"
    assert res["details"]["sleeve"]["status"] == "perfect"
    assert "hip" not in res["details"]
    assert res["recommendations"][0].startswith("Good fit!")


def test_analyze_fit_perfect_adds_tailored_note():
    res = analyze_fit({"waist": 30, "hip": 40}, {"waist": 30.1, "hip": 40.1}, "skirt")
    assert res["overall"]["fit_level"] == "perfect"
    assert "This is nearly a custom-tailored fit." in res["recommendations"]


def test_analyze_fit_without_comparable_data():
    res = analyze_fit({"chest": 40}, {"waist": 30}, "pants")
    assert res["overall"]["avg_difference"] == 0.0
    assert res["overall"]["differences"] == []
    assert res["recommendations"] == ["No comparable measurements were provided."]


def test_evaluate_with_named_strategies():
    user = {"chest": 40, "waist": 32}
    garment = {"chest": 42, "waist": 30}
    comparisons, by_label = evaluate(user, garment, "dress", get_strategy("label"))
    _, by_average = evaluate(user, garment, "dress", get_strategy("average"))
    assert list(comparisons) == ["bust", "waist"]
    assert by_label.fit == "Regular"
    assert by_average.fit == "loose"


def test_canonical_key_wins_regardless_of_case_or_order():
    assert normalize_record({"hips": 44, "Hip": 40}) == {"hip": 40.0}
    assert normalize_record({"HIP": 40, "hips": 44}) == {"hip": 40.0}
    assert normalize_record({"shoulders": 17, " shoulder ": 18}) == {"shoulder": 18.0}


def test_analyzer_judges_shoes_on_foot_length():
    res = analyze_fit({"footLength": 10.5}, {"footLength": 11.8}, "shoes")
    overall = res["overall"]
    assert [d["measure"] for d in overall["differences"]] == ["foot_length"]
    assert overall["avg_difference"] == pytest.approx(1.3)
    assert overall["fit_level"] == "good"
    assert res["recommendations"] != ["No comparable measurements were provided."]

    loose = analyze_fit({"foot_length": 10.0}, {"foot_length": 12.5}, "shoes")
    assert loose["overall"]["fit_level"] == "loose"


def test_analyzer_shoe_size_units_stay_out_of_inch_bands():
    res = analyze_fit({"shoe_size": 9}, {"size": 12}, "shoes")
    assert res["overall"]["differences"] == []


def test_analyzer_foot_length_in_centimetres():
    res = analyze_fit({"foot_length": 26.67}, {"foot_length": 26.67}, "shoes", unit="cm")
    assert res["overall"]["fit_level"] == "perfect"


def test_label_strategy_still_uses_shoe_size():
    res = calculate_fit({"shoe_size": 9, "foot_length": 10.5}, {"size": 9, "foot_length": 13}, "shoes")
    assert list(res["measurements"]) == ["size"]
    assert res["overall_fit"] == "Perfect"
