from .pivot import router as pivot_router
from .patients import router as patients_router

__all__ = ["pivot_router", "patients_router"]
