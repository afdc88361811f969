from .pivot import PivotResponse
from .patient import PatientListResponse, PatientResponse
from .mention import MentionRecord, IngestionSummary

__all__ = [
    "PivotResponse",
    "PatientListResponse",
    "PatientResponse",
    "MentionRecord",
    "IngestionSummary",
]
