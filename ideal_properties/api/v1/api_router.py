from fastapi import APIRouter
from ideal_properties.api.v1.endpoints import contact, reviews, properties, posts, storage

api_router = APIRouter(prefix="/v1")

# Edge functions
api_router.include_router(contact.router, tags=["Contact"])
api_router.include_router(reviews.router, tags=["Reviews"])

# Data layer consumed by the website
api_router.include_router(properties.router, tags=["Properties"])
api_router.include_router(posts.router, tags=["Blog"])
api_router.include_router(storage.router, tags=["Storage"])
