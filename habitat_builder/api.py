"""
Habitat Builder — FastAPI Application Layer

Endpoints:
  1. POST /recommend                   — Ranked, bucketed species for an enclosure
  2. POST /animals/{animal_id}/validate — Size, type and bioactive checks
  3. GET  /animals                     — Catalog listing
  4. GET  /animals/{animal_id}         — Full animal profile
  5. GET  /health                      — Health check
"""
from __future__ import annotations
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .catalog import AnimalCatalog, UnknownAnimalError, load_default_catalog
from .config import Settings, configure_logging, get_settings
from .models import (
    AnimalProfile, AnimalSummary, EnclosureSpecification, HealthResponse,
    RecommendResponse, ValidationReport,
)
from .recommendation_engine import RecommendationEngine

logger = logging.getLogger(__name__)


# ============================================================
# Application State (shared singletons)
# ============================================================

class AppState:
    """Holds the catalog and engine built at startup."""
    settings: Settings
    catalog: AnimalCatalog
    engine: RecommendationEngine
    start_time: float
    request_count: int = 0

    def __init__(self):
        self.start_time = time.monotonic()
        self.request_count = 0


_state = AppState()


# ============================================================
# Lifespan: Startup / Shutdown
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the catalog once on startup; it is read-only afterwards."""
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting Habitat Builder...")

    _state.settings = settings
    _state.catalog = load_default_catalog(settings.catalog_path)
    _state.engine = RecommendationEngine(_state.catalog)

    logger.info(
        f"System ready. Environment: {settings.environment}, "
        f"catalog: {len(_state.catalog)} animals")
    yield

    logger.info("Shutting down Habitat Builder...")


# ============================================================
# FastAPI App
# ============================================================

app = FastAPI(
    title="Habitat Builder API",
    description="Species recommendations and enclosure validation for "
                "reptile and amphibian keepers.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# Middleware: Request Counting & Timing
# ============================================================

@app.middleware("http")
async def timing_middleware(request: Request, call_next):
    start = time.monotonic()
    _state.request_count += 1
    response = await call_next(request)
    elapsed = int((time.monotonic() - start) * 1000)
    response.headers["X-Response-Time-Ms"] = str(elapsed)
    return response


# ============================================================
# 1. POST /recommend — Species Recommendation
# ============================================================

@app.post("/recommend", response_model=RecommendResponse, tags=["Recommendations"])
async def recommend_animals(spec: EnclosureSpecification):
    """
    Recommend species for an enclosure.

    Animals that can never live in the given enclosure material are left out
    entirely; the rest are scored 0-100 and grouped into perfect matches
    (80+), good fits (60-79) and possible matches (below 60).
    """
    try:
        return _state.engine.recommend(spec)
    except Exception as e:
        logger.exception("Recommendation failed")
        raise HTTPException(500, f"Recommendation error: {str(e)}")


# ============================================================
# 2. POST /animals/{animal_id}/validate — Single-Species Validation
# ============================================================

@app.post("/animals/{animal_id}/validate", response_model=ValidationReport,
          tags=["Validation"])
async def validate_enclosure(animal_id: str, spec: EnclosureSpecification):
    """Validate an enclosure for one chosen species."""
    try:
        report = _state.engine.validate(animal_id, spec)
    except UnknownAnimalError:
        raise HTTPException(404, f"Animal not found: {animal_id}")
    except Exception as e:
        logger.exception("Validation failed")
        raise HTTPException(500, f"Validation error: {str(e)}")

    logger.info(
        f"[validate] animal={animal_id} size_ok={report.size.is_valid} "
        f"type_ok={report.type.compatible} bioactive_ok={report.bioactive.compatible}")
    return report


# ============================================================
# 3-4. Catalog lookup
# ============================================================

@app.get("/animals", response_model=list[AnimalSummary], tags=["Animals"])
async def list_animals():
    return [
        AnimalSummary(
            id=animal_id,
            common_name=p.common_name,
            scientific_name=p.scientific_name,
            care_level=p.care_level,
            water_feature=p.water_feature,
            bioactive_compatible=p.bioactive_compatible,
        )
        for animal_id, p in _state.catalog.items()
    ]


@app.get("/animals/{animal_id}", response_model=AnimalProfile, tags=["Animals"])
async def get_animal(animal_id: str):
    profile = _state.catalog.get(animal_id)
    if not profile:
        raise HTTPException(404, f"Animal not found: {animal_id}")
    return profile


# ============================================================
# 5. GET /health
# ============================================================

@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    return HealthResponse(
        status="healthy",
        catalog_size=len(_state.catalog),
        version=__version__,
        uptime_seconds=int(time.monotonic() - _state.start_time),
    )
