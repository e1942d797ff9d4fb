import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend import config
from backend.routers import address, data, download, scene
from scenebuilder.errors import GeocodeError, NotFound

logger = logging.getLogger(__name__)

app = FastAPI(
    title="SceneBuilder API",
    description="Backend API for the address-to-3D-scene visualizer",
    version="0.1.0",
)

# ---------------------------------------------------------------------------
# CORS -- allow the browser client's dev server
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(address.router)
app.include_router(data.router)
app.include_router(download.router)
app.include_router(scene.router)


# ---------------------------------------------------------------------------
# Collaborator errors that escape a router surface as 404s
# ---------------------------------------------------------------------------
@app.exception_handler(GeocodeError)
async def geocode_error_handler(request: Request, exc: GeocodeError):
    logger.warning(f"Geocoding failed for {request.url.path}: {exc}")
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.get("/")
async def root():
    return {"status": "ok", "service": "SceneBuilder API"}
