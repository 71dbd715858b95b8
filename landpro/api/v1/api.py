# File: landpro/api/v1/api.py

from fastapi import APIRouter

from landpro.api.v1.routes_auth import router as auth_router
from landpro.api.v1.routes_client import router as client_router
from landpro.api.v1.routes_dashboard import router as dashboard_router
from landpro.api.v1.routes_invoice import router as invoice_router
from landpro.api.v1.routes_misc import router as misc_router
from landpro.api.v1.routes_portal import router as portal_router
from landpro.api.v1.routes_project import router as project_router
from landpro.api.v1.routes_quote import jobs_router
from landpro.api.v1.routes_quote import router as quote_router


api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(project_router, prefix="/projects", tags=["projects"])
api_router.include_router(client_router, prefix="/clients", tags=["clients"])
api_router.include_router(quote_router, prefix="/quotes", tags=["quotes"])
api_router.include_router(jobs_router, prefix="/jobs", tags=["jobs"])
api_router.include_router(invoice_router, prefix="/invoices", tags=["invoices"])
api_router.include_router(portal_router, prefix="/portal", tags=["portal"])

api_router.include_router(dashboard_router)
api_router.include_router(misc_router)
