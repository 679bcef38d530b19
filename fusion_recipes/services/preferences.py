from collections.abc import Iterable

from fusion_recipes.schemas.preferences import PreferenceSelections, Profile
from fusion_recipes.schemas.recipe import GenerationRequest
from fusion_recipes.services.errors import PreferenceValidationError

MAX_CUISINES = 2


def _unique(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        cleaned = value.strip()
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            result.append(cleaned)
    return result


def aggregate(
    selections: PreferenceSelections,
    profile: Profile | None = None,
    use_profile_prefs: bool | None = None,
) -> GenerationRequest:
    """Turn form selections (and optionally the stored profile) into a request.

    With profile preferences on, dietary tags come from the profile verbatim
    and any ad hoc medical/lifestyle/religious toggles are ignored. More than
    two distinct cuisines is rejected, never truncated.
    """
    if use_profile_prefs is None:
        use_profile_prefs = selections.use_profile_prefs

    dish_type = (selections.dish_type or "").strip()
    if not dish_type:
        raise PreferenceValidationError(PreferenceValidationError.MISSING_DISH_TYPE)

    cuisines = _unique(selections.cuisines)
    if not cuisines:
        raise PreferenceValidationError(PreferenceValidationError.NO_CUISINE_SELECTED)
    if len(cuisines) > MAX_CUISINES:
        raise PreferenceValidationError(PreferenceValidationError.TOO_MANY_CUISINES)

    if use_profile_prefs:
        source = profile or Profile()
        tags = [
            *source.medical_health_preferences,
            *source.lifestyle_dietary_preferences,
            *source.religious_preferences,
        ]
    else:
        tags = [*selections.medical, *selections.lifestyle, *selections.religious]

    return GenerationRequest(
        dish_type=dish_type,
        cuisines=cuisines,
        dietary_tags=_unique(tags),
        custom_ingredients=_unique([*selections.pantry_items, *selections.custom_ingredients]),
    )
