"""Core system components"""

from .errors import BriefsmithError, TransportError, BackendError, MalformedResponseError
from .models import (
    Language,
    DialogueLine,
    Brief,
    Shot,
    GeneratedResult,
    SuggestionField,
    HistoryEntry,
)

__all__ = [
    'BriefsmithError',
    'TransportError',
    'BackendError',
    'MalformedResponseError',
    'Language',
    'DialogueLine',
    'Brief',
    'Shot',
    'GeneratedResult',
    'SuggestionField',
    'HistoryEntry',
]
