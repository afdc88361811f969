import logging
import re
from typing import Any, Dict, Optional, Sequence, Union

from sqlalchemy.orm import Session

from ..config import get_settings
from ..dimensions import parse_dimension_type
from ..errors import PivotValidationError
from .mention_store import fetch_mentions_for_patients
from .pivot import PivotMatrix, build_pivot, top_rows
from .serializer import serialize_pivot

logger = logging.getLogger(__name__)

PATIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,63}$")


class PivotService:
    @staticmethod
    def validate_patient_id(patient_id: str) -> str:
        if patient_id is None or not PATIENT_ID_PATTERN.match(patient_id):
            raise PivotValidationError(f"Invalid patient id '{patient_id}'.")
        return patient_id

    @staticmethod
    def validate_limit(limit: Union[int, str, None]) -> Optional[int]:
        if limit is None:
            return None
        try:
            limit = int(limit)
        except (TypeError, ValueError) as e:
            raise PivotValidationError(f"limit must be an integer, got '{limit}'.") from e
        max_rows = get_settings().pivot_max_rows
        if limit < 1 or limit > max_rows:
            raise PivotValidationError(f"limit must be between 1 and {max_rows}.")
        return limit

    @staticmethod
    def build_matrix(
        db: Session,
        dimension: str,
        patient_ids: Optional[Sequence[str]],
        limit: Union[int, str, None] = None,
    ) -> PivotMatrix:
        dimension_type = parse_dimension_type(dimension)
        ids = [PivotService.validate_patient_id(pid) for pid in (patient_ids or [])]
        limit = PivotService.validate_limit(limit)

        mentions = fetch_mentions_for_patients(db, ids, dimension_type)
        matrix = build_pivot(mentions, dimension_type)

        logger.info(
            "Built %s pivot: patients=%s, mentions=%d, dropped=%d, rows=%d, columns=%d",
            dimension_type.value, ids or "all", len(mentions), matrix.dropped_mentions,
            len(matrix.rows), len(matrix.columns),
        )

        if limit is not None:
            matrix = top_rows(matrix, limit)
        return matrix

    @staticmethod
    def patient_pivot(
        db: Session,
        dimension: str,
        patient_id: str,
        limit: Union[int, str, None] = None,
    ) -> Dict[str, Any]:
        PivotService.validate_patient_id(patient_id)
        return serialize_pivot(PivotService.build_matrix(db, dimension, [patient_id], limit))

    @staticmethod
    def population_pivot(
        db: Session,
        dimension: str,
        patient_ids: Optional[Sequence[str]] = None,
        limit: Union[int, str, None] = None,
    ) -> Dict[str, Any]:
        return serialize_pivot(PivotService.build_matrix(db, dimension, patient_ids, limit))
