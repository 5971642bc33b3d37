from platec.presentation.api.routers.auth import router as auth_router
from platec.presentation.api.routers.teachers import router as teachers_router

__all__ = ["auth_router", "teachers_router"]
