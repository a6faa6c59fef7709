from fastapi import APIRouter
from vacaplanner.routers import auth, leave_requests, users, calendar

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(leave_requests.router, tags=["Leave Requests"])
api_router.include_router(users.router, tags=["Users"])
api_router.include_router(calendar.router, tags=["Calendar"])
