from fastapi import APIRouter

from api.v1.admin import router as admin_router
from api.v1.queue import router as queue_router

router = APIRouter()

router.include_router(queue_router, prefix="/v1")
router.include_router(admin_router, prefix="/v1")
