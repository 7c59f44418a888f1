from .filterTools import router as filterTools_router

__all__ = ["filterTools_router"]
