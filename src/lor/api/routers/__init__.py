from .items import router as items_router
from .resources import router as resources_router

__all__ = ["items_router", "resources_router"]
