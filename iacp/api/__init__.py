"""API routes mounted under API_PREFIX."""

from fastapi import APIRouter

from iacp.api import applications, auth, bindings, config, roles, users

router = APIRouter()
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(config.router, prefix="/config", tags=["config"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(roles.router, prefix="/roles", tags=["roles"])
router.include_router(applications.router, prefix="/applications", tags=["applications"])
router.include_router(bindings.router, tags=["applications"])
