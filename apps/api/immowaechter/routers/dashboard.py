"""Dashboard router - risk indicators for the owner dashboard."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from immowaechter.core.deps import get_db
from immowaechter.core.structured_logging import build_log_context
from immowaechter.schemas.risk import PropertyRiskScoreResponse
from immowaechter.services import risk_score_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def _error(status_code: int, message: str, details: str | None = None) -> JSONResponse:
    content = {"success": False, "error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


@router.get("/property-risk-score", response_model=PropertyRiskScoreResponse)
def get_property_risk_score(
    property_id: str | None = Query(None, alias="propertyId"),
    db: Session = Depends(get_db),
):
    """
    Aggregate 0-100 risk score for one property.

    Levels: >=80 critical, >=60 high, >=40 medium, else low.
    """
    if not property_id:
        return _error(400, "Property ID is required")
    try:
        parsed_id = UUID(property_id)
    except ValueError:
        return _error(400, "Invalid property ID")

    try:
        result = risk_score_service.get_property_risk_score(db, parsed_id)
    except SQLAlchemyError as exc:
        logger.exception(
            "Failed to calculate property risk score",
            extra=build_log_context(route="/api/dashboard/property-risk-score", property_id=property_id),
        )
        return _error(500, "Failed to calculate property risk score", str(exc))

    if result is None:
        return _error(404, "Property not found")

    logger.info(
        "Property risk score %s (%s)",
        result.score,
        result.level,
        extra=build_log_context(route="/api/dashboard/property-risk-score", property_id=property_id),
    )
    return PropertyRiskScoreResponse(data=result)
