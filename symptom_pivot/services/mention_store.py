import logging
from typing import List, Optional, Sequence

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..dimensions import DimensionType, get_dimension_spec
from ..errors import DataAccessError
from ..models.mention import ExtractedMention, HRSN_MARKER, SympProb
from .pivot import PivotMention

logger = logging.getLogger(__name__)


def _mention_query(dimension_type: DimensionType, patient_ids: Optional[Sequence[str]]):
    spec = get_dimension_spec(dimension_type)
    table = ExtractedMention.__table__
    value_column = table.c[spec.value_field]

    stmt = select(value_column.label("value"), table.c.dos_date).where(
        value_column.is_not(None),
        value_column != "",
    )

    if patient_ids:
        stmt = stmt.where(table.c.patient_id.in_(list(patient_ids)))

    if spec.symp_prob:
        stmt = stmt.where(table.c.symp_prob == spec.symp_prob)

    if spec.include_hrsn_markers:
        stmt = stmt.where(or_(
            table.c.zcode_hrsn == HRSN_MARKER,
            table.c.symp_prob == SympProb.PROBLEM.value,
        ))

    return stmt.order_by(table.c.dos_date, table.c.id)


def fetch_mentions_for_patients(
    db: Session,
    patient_ids: Optional[Sequence[str]],
    dimension_type: DimensionType,
) -> List[PivotMention]:
    """Read the mentions feeding a pivot of ``dimension_type``.

    An empty or missing ``patient_ids`` reads every patient. Storage errors
    surface as DataAccessError; nothing is retried.
    """
    try:
        rows = db.execute(_mention_query(dimension_type, patient_ids)).mappings().all()
    except SQLAlchemyError as e:
        logger.error(
            "Mention query failed: dimension=%s, patients=%s: %s",
            dimension_type.value, list(patient_ids or []), e,
        )
        raise DataAccessError(f"Failed to read {dimension_type.value} mentions") from e

    mentions = [PivotMention(value=row["value"], dos_date=row["dos_date"]) for row in rows]
    logger.debug("Fetched %d %s mentions", len(mentions), dimension_type.value)
    return mentions


def fetch_mentions(db: Session, patient_id: str, dimension_type: DimensionType) -> List[PivotMention]:
    return fetch_mentions_for_patients(db, [patient_id], dimension_type)
