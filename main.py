"""
PG Manager API Gateway (FastAPI)
Buildings, rooms, tenants, rent payments and the owner dashboard.
"""
from datetime import datetime

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import APP_CONFIG, get_env
from routers import auth, buildings, dashboard, payment, tenant
from routers.deps import get_dashboard_service
from routers.exception_handler import setup_exception_handlers
from services.dashboard_service import DashboardService
from services.logger import logger

# Initialize FastAPI
app = FastAPI(
    title=f"{APP_CONFIG['title']} API",
    description="Backend for the PG / hostel owner dashboard",
    version=APP_CONFIG["version"],
)

# CORS (comma-separated origins; "*" for development)
allowed_origins = [o.strip() for o in get_env("CORS_ORIGINS", "*").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Register routers
app.include_router(auth.router)
app.include_router(buildings.router)
app.include_router(tenant.router)
app.include_router(payment.router)
app.include_router(dashboard.router)

logger.info(f"🚀 {APP_CONFIG['title']} API {APP_CONFIG['version']} ({APP_CONFIG['environment']})")


@app.get("/")
async def root():
    return {
        "message": f"{APP_CONFIG['title']} API {APP_CONFIG['version']} is running 🚀",
        "timestamp": datetime.now().isoformat()
    }


@app.get("/api/health")
def health_check(service: DashboardService = Depends(get_dashboard_service)):
    """System Health Check"""
    db_ok = service.health_check()
    return {"status": "healthy" if db_ok else "degraded", "service": "backend", "database": db_ok}
