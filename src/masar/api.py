from fastapi import APIRouter

from masar.modules.acceptances.router import router as acceptances_router
from masar.modules.auth import router as auth_router
from masar.modules.schools.router import router as schools_router
from masar.modules.selection.router import router as selection_router
from masar.modules.specialties.router import router as specialties_router
from masar.modules.teachers.router import router as teachers_router
from masar.modules.videos.router import router as videos_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

api_router.include_router(teachers_router, prefix="/teachers", tags=["Teachers"])

api_router.include_router(schools_router, prefix="/schools", tags=["Schools"])

api_router.include_router(specialties_router, prefix="/specialties", tags=["Specialties"])

api_router.include_router(selection_router, prefix="/selection", tags=["Selection"])

api_router.include_router(acceptances_router, prefix="/acceptance", tags=["Acceptances"])

api_router.include_router(videos_router, prefix="/videos", tags=["Videos"])
