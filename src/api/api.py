from api.endpoints import markers
from fastapi import APIRouter

api_router = APIRouter()
api_router.include_router(markers.router, prefix="/markers", tags=["Map Marker Clustering"])
