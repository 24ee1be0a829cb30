from fastapi import APIRouter
from app.routers import auth, employees, dependents, employee_roles, documents, onboarding, time_off, roles, teams

# Centralized API router hub
# This follows the "Leaf Node" pattern: Routers are aggregated here,
# and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(employees.router, tags=["Employees"])
api_router.include_router(dependents.router, tags=["Dependents"])
api_router.include_router(employee_roles.router, tags=["Employee Roles"])
api_router.include_router(documents.router, tags=["Documents"])
api_router.include_router(onboarding.router, tags=["Onboarding"])
api_router.include_router(time_off.router, tags=["Time Off"])
api_router.include_router(roles.router, tags=["Roles"])
api_router.include_router(teams.router, tags=["Teams"])
