from fastapi import APIRouter

from src.projecthub.api.v1 import applications, files, members, milestones, projects, tasks

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(applications.router)
api_router.include_router(members.router)
api_router.include_router(files.router)
api_router.include_router(milestones.router)
api_router.include_router(tasks.router)
