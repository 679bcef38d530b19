from fusion_recipes.schemas.recipe import GenerationRequest, Recipe
from fusion_recipes.services.response_parser import issue_recipe_ids

_CANNED_RECIPES = (
    {
        "title": "Thai-Inspired Mediterranean Quinoa Bowl",
        "flavor_text": "A fusion of Mediterranean freshness and Thai aromatics.",
        "ingredients": [
            "1 cup quinoa",
            "2 tablespoons olive oil",
            "1 can (400 ml) coconut milk",
            "2 cups mixed vegetables",
            "1 handful fresh basil and mint",
            "1 tablespoon lemon juice",
        ],
        "steps": [
            "Cook quinoa according to package instructions.",
            "Saute vegetables in olive oil for 5 minutes.",
            "Warm coconut milk with herbs and lemon juice.",
            "Combine everything and serve warm.",
        ],
        "dish_type": "Dinner",
        "prep_time_min": 30,
        "cooking_time": "30 minutes",
        "cuisines": ["Thai", "Mediterranean"],
        "dietary_tags": ["Vegetarian", "Gluten-Free"],
    },
    {
        "title": "Mexican-Japanese Sushi Tacos",
        "flavor_text": "Where Tokyo meets Mexico City in every bite.",
        "ingredients": [
            "2 cups cooked sushi rice",
            "4 nori sheets",
            "200 g sashimi-grade tuna",
            "1 ripe avocado",
            "1 tablespoon lime juice",
            "2 tablespoons chipotle mayonnaise",
        ],
        "steps": [
            "Season the sushi rice and let it cool.",
            "Cut nori sheets into taco-sized rounds.",
            "Dice the tuna and avocado and toss with lime juice.",
            "Fill the nori with rice and tuna, then top with chipotle mayonnaise.",
        ],
        "dish_type": "Dinner",
        "prep_time_min": 45,
        "cooking_time": "45 minutes",
        "cuisines": ["Japanese", "Mexican"],
        "dietary_tags": ["Gluten-Free"],
    },
    {
        "title": "Masala Shakshuka",
        "flavor_text": "Warm garam masala folded into a classic pan of baked eggs.",
        "ingredients": [
            "4 eggs",
            "1 can (400 g) crushed tomatoes",
            "1 onion, diced",
            "1 teaspoon garam masala",
            "1 tablespoon olive oil",
        ],
        "steps": [
            "Soften the onion in olive oil for 5 minutes.",
            "Stir in garam masala and tomatoes and simmer for 10 minutes.",
            "Crack in the eggs, cover, and cook until just set.",
        ],
        "dish_type": "Breakfast",
        "prep_time_min": 25,
        "cooking_time": "25 minutes",
        "cuisines": ["Indian", "Lebanese"],
        "dietary_tags": ["Vegetarian", "Gluten-Free"],
    },
)


def _matches(entry: dict, request: GenerationRequest) -> bool:
    if entry["dish_type"].lower() != request.dish_type.lower():
        return False
    if not any(cuisine in entry["cuisines"] for cuisine in request.cuisines):
        return False
    return all(tag in entry["dietary_tags"] for tag in request.dietary_tags)


class FallbackRecipeSupplier:
    """Canned recipes for non-production environments.

    Matches on dish type, cuisine overlap and dietary tags; with no match the
    whole canned set is returned. Every call issues fresh ids.
    """

    def supply(self, request: GenerationRequest) -> list[Recipe]:
        matched = [entry for entry in _CANNED_RECIPES if _matches(entry, request)]
        selected = matched or list(_CANNED_RECIPES)
        return [
            Recipe(id=recipe_id, difficulty="medium", is_favorite=False, **entry)
            for recipe_id, entry in zip(issue_recipe_ids(len(selected)), selected)
        ]
