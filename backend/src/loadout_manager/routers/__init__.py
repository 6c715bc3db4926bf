from fastapi import APIRouter

from loadout_manager.routers.groups import router as groups_router
from loadout_manager.routers.mods import router as mods_router
from loadout_manager.routers.profiles import router as profiles_router
from loadout_manager.routers.settings import router as settings_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(profiles_router)
api_router.include_router(groups_router)
api_router.include_router(mods_router)
api_router.include_router(settings_router)
