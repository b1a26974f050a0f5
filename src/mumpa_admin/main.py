"""FastAPI application - health, age projection, percentile curves and children."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Annotated, Any, Union

from fastapi import Body, Depends, FastAPI, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from mumpa_admin.api_client.tokens import decode_token
from mumpa_admin.config import get_settings
from mumpa_admin.growth import build_percentile_curve, project_age
from mumpa_admin.models import BornRecord, UnbornRecord
from mumpa_admin.persistence import DocumentStore, create_store
from mumpa_admin.services import ChildrenService
from mumpa_admin.services.children_service import projection_fields

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Created at startup
_store: DocumentStore | None = None

security = HTTPBearer(auto_error=False)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup."""
    global _store
    _store = create_store()
    yield
    _store = None


app = FastAPI(
    title="Mumpa Admin API",
    description="Live child ages, growth percentile curves and admin helpers for the Mumpa backend",
    version="0.1.0",
    lifespan=lifespan,
)


def get_store() -> DocumentStore:
    if _store is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Store not initialized")
    return _store


def current_uid(credentials: HTTPAuthorizationCredentials | None = Depends(security)) -> str:
    """uid claim of a valid bearer token."""
    secret = get_settings().jwt_secret
    if not secret:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="JWT_SECRET not configured")
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")
    try:
        claims = decode_token(credentials.credentials, secret)
    except JWTError as e:
        logger.warning("Rejected token: %s", e)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
    uid = claims.get("uid")
    if not uid:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has no uid")
    return uid


@app.get("/api/health")
async def health() -> dict[str, str]:
    """Health check for load balancers."""
    return {"status": "ok"}


@app.post("/api/age/project")
async def project(
    record: Annotated[Union[BornRecord, UnbornRecord], Body(discriminator="kind")],
    now: datetime | None = Query(default=None, description="Reference instant, defaults to now"),
) -> dict[str, Any]:
    """Stored and projected age / gestation for a single record."""
    projected = project_age(record, now)
    return {"kind": record.kind, **projection_fields(record, projected)}


@app.get("/api/growth/percentiles/{measurement_type}/{sex}")
async def percentiles(
    measurement_type: str,
    sex: str,
    total_weeks: int = Query(default=26, ge=0, le=520, alias="totalWeeks"),
) -> dict[str, Any]:
    points = build_percentile_curve(measurement_type, sex, total_weeks)
    if not points:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No percentile calibration for {measurement_type}/{sex}",
        )
    return {"type": measurement_type, "sex": sex, "points": [p.to_document() for p in points]}


@app.get("/api/auth/children")
def children(
    uid: str = Depends(current_uid),
    store: DocumentStore = Depends(get_store),
) -> dict[str, Any]:
    """Children of the authenticated parent with live ages."""
    try:
        data = ChildrenService(store).list_children(uid)
    except Exception as e:
        logger.exception("Listing children failed for %s: %s", uid, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not load children")
    return {"success": True, "data": data}
