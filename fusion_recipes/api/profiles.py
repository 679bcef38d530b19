from fastapi import APIRouter

from fusion_recipes.db.profiles import get_profile, save_profile
from fusion_recipes.schemas.preferences import Profile

router = APIRouter()


@router.get("/profiles/{user_id}", response_model=Profile)
async def read_profile(user_id: str) -> Profile:
    return get_profile(user_id) or Profile()


@router.put("/profiles/{user_id}", response_model=Profile)
async def update_profile(user_id: str, profile: Profile) -> Profile:
    save_profile(user_id, profile)
    return profile
