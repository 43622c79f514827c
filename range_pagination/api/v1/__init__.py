from fastapi import APIRouter

from range_pagination.api.v1.routes.catalogue import router as catalogue_router

api_router = APIRouter()

api_router.include_router(catalogue_router)


__all__ = ["api_router"]
