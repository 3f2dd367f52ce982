"""
app/api/routers package marker.
"""

from app.api.routers.collection_upload import router as collection_upload_router

__all__ = [
    "collection_upload_router",
]
