import pytest

from fusion_recipes.schemas.preferences import PreferenceSelections, Profile
from fusion_recipes.services.errors import PreferenceValidationError
from fusion_recipes.services.preferences import aggregate


def _profile() -> Profile:
    return Profile(
        medical_health_preferences=["Low Salt"],
        lifestyle_dietary_preferences=["Vegan"],
        religious_preferences=["Halal"],
        pantry_items=["rice"],
    )


def test_aggregate_unions_dietary_selections_in_category_order() -> None:
    request = aggregate(
        PreferenceSelections(
            dish_type="Dinner",
            cuisines=["Thai", "Mediterranean"],
            medical=["Diabetic-Friendly"],
            lifestyle=["Vegetarian", "Gluten-Free"],
            religious=["Kosher"],
        )
    )

    assert request.dish_type == "Dinner"
    assert request.cuisines == ["Thai", "Mediterranean"]
    assert request.dietary_tags == ["Diabetic-Friendly", "Vegetarian", "Gluten-Free", "Kosher"]
    assert request.custom_ingredients == []


def test_aggregate_uses_profile_tags_and_ignores_ad_hoc_toggles() -> None:
    request = aggregate(
        PreferenceSelections(
            dish_type="Lunch",
            cuisines=["Korean"],
            lifestyle=["Keto"],
            use_profile_prefs=True,
        ),
        profile=_profile(),
    )

    assert request.dietary_tags == ["Low Salt", "Vegan", "Halal"]


def test_aggregate_with_profile_flag_and_no_profile_yields_no_tags() -> None:
    request = aggregate(
        PreferenceSelections(dish_type="Lunch", cuisines=["Korean"], lifestyle=["Keto"]),
        profile=None,
        use_profile_prefs=True,
    )

    assert request.dietary_tags == []


def test_aggregate_merges_pantry_items_and_custom_ingredients() -> None:
    request = aggregate(
        PreferenceSelections(
            dish_type="Snack",
            cuisines=["Mexican"],
            pantry_items=["rice", "lime"],
            custom_ingredients=[" lime ", "", "cilantro"],
        )
    )

    assert request.custom_ingredients == ["rice", "lime", "cilantro"]


def test_aggregate_deduplicates_cuisines_preserving_selection_order() -> None:
    request = aggregate(
        PreferenceSelections(dish_type="Dinner", cuisines=["Thai", " Italian", "Thai"])
    )

    assert request.cuisines == ["Thai", "Italian"]


@pytest.mark.parametrize("dish_type", [None, "", "   "])
def test_aggregate_rejects_missing_dish_type(dish_type) -> None:
    with pytest.raises(PreferenceValidationError) as exc_info:
        aggregate(PreferenceSelections(dish_type=dish_type, cuisines=["Thai"]))

    assert exc_info.value.reason == "missing_dish_type"


def test_aggregate_rejects_zero_cuisines() -> None:
    with pytest.raises(PreferenceValidationError) as exc_info:
        aggregate(PreferenceSelections(dish_type="Dinner", cuisines=[]))

    assert exc_info.value.reason == "no_cuisine_selected"


def test_aggregate_rejects_three_cuisines_instead_of_truncating() -> None:
    with pytest.raises(PreferenceValidationError) as exc_info:
        aggregate(
            PreferenceSelections(dish_type="Dinner", cuisines=["Thai", "Italian", "French"])
        )

    assert exc_info.value.reason == "too_many_cuisines"
    assert exc_info.value.error_class == "too_many_cuisines"
