from fastapi import APIRouter, Depends
from app.api.v1.endpoints import auth, category, navigation, user
from app.api import deps

api_router = APIRouter()

# Public routes (no auth required)
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])

# Protected routes (require authentication)
api_router.include_router(
    navigation.router,
    prefix="/navigation",
    tags=["navigation"],
    dependencies=[Depends(deps.get_current_user)]
)

api_router.include_router(
    category.router,
    prefix="/catalog/categories",
    tags=["categories"],
    dependencies=[Depends(deps.get_current_user)]
)

# Admin routes (page permission checked per endpoint)
api_router.include_router(
    user.router,
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(deps.get_current_user)]
)
