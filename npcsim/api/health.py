"""Health check endpoint."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.orm import Session

from npcsim.db.database import get_db

router = APIRouter()


@router.get("/health")
def health_check(request: Request, db: Session = Depends(get_db)) -> dict[str, object]:
    """Report database connectivity and whether the population is loaded."""
    world = getattr(request.app.state, "world", None)
    population = len(world.agents) if world is not None else 0
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except Exception:
        database = "disconnected"
    status = "ok" if database == "connected" and world is not None else "error"
    return {"status": status, "database": database, "population": population}
