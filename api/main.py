"""
api.main
========

HTTP layer over the WillRegistry.  The hosting environment authenticates
callers and forwards their identity in ``X-Caller``.
"""

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from testament import __version__
from testament.registry import WillRegistry
from testament.settings import API_DEBUG
from .deps import get_registry

app = FastAPI(
    title="Testament API",
    version=__version__,
    description="HTTP adapter over the digital-will state-transition registry.",
    debug=API_DEBUG,
)

# --- CORS ----------------------------------------------------------
# Dev-only origins; tighten for deployment.
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Caller", "X-Logical-Time"],
)

# --- Include Routers ----------------------------------------------------------
from .wills import router as wills_router
from .proof_of_life import router as proof_of_life_router

app.include_router(wills_router)
app.include_router(proof_of_life_router)


# ---------- health-check ----------
@app.get("/")
def root():
    return {"status": "ok", "msg": "Testament API is alive"}


# ---------- GET /asset-types ----------
@app.get("/asset-types")
def asset_types(reg: WillRegistry = Depends(get_registry)):
    return list(reg.get_valid_asset_types())
