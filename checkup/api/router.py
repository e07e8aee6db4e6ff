"""Central router that includes all sub-routers."""

from fastapi import APIRouter, Depends

from checkup.dependencies import enforce_route_policy
from checkup.api.auth import router as auth_router
from checkup.api.submissions import router as submissions_router
from checkup.api.uploads import router as uploads_router
from checkup.api.admin import router as admin_router

api_router = APIRouter(dependencies=[Depends(enforce_route_policy)])
api_router.include_router(auth_router)
api_router.include_router(submissions_router)
api_router.include_router(uploads_router)
api_router.include_router(admin_router)
