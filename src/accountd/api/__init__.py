"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Health and users (signup/login) are open. The profile router
protects itself: /me declares Depends(require_auth), which runs the
bearer-token gate before the handler.
"""

from fastapi import APIRouter

from accountd.api.health import router as health_router
from accountd.api.profile import router as profile_router
from accountd.api.users import router as users_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(users_router, tags=["users"])
api_router.include_router(profile_router, tags=["profile"])
