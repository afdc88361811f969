from .patient import Patient
from .note import Note
from .mention import ExtractedMention, SympProb, HRSN_MARKER

__all__ = [
    "Patient",
    "Note",
    "ExtractedMention",
    "SympProb",
    "HRSN_MARKER",
]
