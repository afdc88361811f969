from .pivot import PivotMatrix, PivotMention, build_pivot, top_rows
from .serializer import serialize_pivot
from .mention_store import fetch_mentions, fetch_mentions_for_patients
from .pivot_service import PivotService

__all__ = [
    "PivotMatrix",
    "PivotMention",
    "build_pivot",
    "top_rows",
    "serialize_pivot",
    "fetch_mentions",
    "fetch_mentions_for_patients",
    "PivotService",
]
