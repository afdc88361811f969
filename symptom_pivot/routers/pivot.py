import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import DataAccessError, PivotValidationError
from ..schemas.pivot import PivotResponse
from ..services.pivot_service import PivotService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pivot", tags=["pivot"])


def _to_http_error(e: Exception, dimension_type: str) -> HTTPException:
    if isinstance(e, PivotValidationError):
        logger.warning("Rejected %s pivot request: %s", dimension_type, e.message)
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    logger.error("Pivot %s failed: %s", dimension_type, e)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "data_access_error", "message": str(e)},
    )


@router.get("/{dimension_type}", response_model=PivotResponse)
def get_population_pivot(
    dimension_type: str,
    patient_id: Optional[List[str]] = Query(None, description="Restrict to these patients; all when omitted"),
    limit: Optional[str] = Query(None, description="Keep only the busiest N rows (1 to PIVOT_MAX_ROWS)"),
    db: Session = Depends(get_db),
):
    try:
        return PivotService.population_pivot(db, dimension_type, patient_id, limit)
    except (PivotValidationError, DataAccessError) as e:
        raise _to_http_error(e, dimension_type) from e


@router.get("/{dimension_type}/{patient_id}", response_model=PivotResponse)
def get_patient_pivot(
    dimension_type: str,
    patient_id: str,
    limit: Optional[str] = Query(None, description="Keep only the busiest N rows (1 to PIVOT_MAX_ROWS)"),
    db: Session = Depends(get_db),
):
    try:
        return PivotService.patient_pivot(db, dimension_type, patient_id, limit)
    except (PivotValidationError, DataAccessError) as e:
        raise _to_http_error(e, dimension_type) from e
