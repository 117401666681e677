# apps/api/cms/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, TimeoutError as PoolTimeoutError

from cms.core.config import settings
from cms.db.base import Base
from cms.db.session import engine, SessionLocal

# MODELLER
import cms.models.models
import cms.db.models_site_settings

# ROUTERLAR
from cms.api.routes_auth import router as auth_router
from cms.api.routes_users import router as users_router
from cms.api.routes_admin_profile import router as admin_profile_router
from cms.api.routes_site_settings import router as site_settings_router
from cms.api.routes_site_config import router as site_config_router
from cms.api.routes_theme_settings import router as theme_settings_router
from cms.api.routes_admin_console import router as admin_console_router
from cms.api.route_seed import router as seed_router

from cms.services.site_config_service import default_settings
from cms.services.site_settings_service import insert_missing

app = FastAPI(title=settings.APP_NAME)

# ---------------- CORS ----------------
# ENV ile override edilebilir: CORS_ALLOW_ORIGINS="https://foo.com,https://bar.com"
_env_origins = settings.CORS_ALLOW_ORIGINS.strip()
if _env_origins:
    FRONT_ORIGINS = [o.strip() for o in _env_origins.split(",") if o.strip()]
else:
    FRONT_ORIGINS = [
        "http://localhost:5173",   # local vite
        "http://127.0.0.1:5173",
        "http://localhost:8080",
    ]

app.add_middleware(
    CORSMiddleware,
    allow_origins=FRONT_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)
print(f"[cors] allow_origins={FRONT_ORIGINS}")

# tabloları oluştur
Base.metadata.create_all(bind=engine)

@app.exception_handler(OperationalError)
@app.exception_handler(PoolTimeoutError)
async def storage_unavailable(request: Request, exc: Exception):
    print(f"[storage] {request.method} {request.url.path} failed: {exc.__class__.__name__}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "storage unavailable"})

@app.on_event("startup")
def seed_default_settings():
    if not settings.SEED_DEFAULT_SETTINGS:
        print("[startup-seed] disabled by SEED_DEFAULT_SETTINGS")
        return
    db = SessionLocal()
    try:
        added = insert_missing(db, default_settings())
        print(f"[startup-seed] site_settings: {added} missing key(s) added")
    finally:
        db.close()

@app.get("/api/health")
def healthz():
    return {"ok": True}

# Router kayıtları
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(admin_profile_router)
app.include_router(site_settings_router)
app.include_router(site_config_router)
app.include_router(theme_settings_router)
app.include_router(admin_console_router)
app.include_router(seed_router)
