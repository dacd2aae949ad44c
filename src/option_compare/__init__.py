"""
Option Compare - weighted decision matrix with multi-project storage and share links
"""

from .models import Option, Criterion, Project, ProjectCollection
from .scoring import OptionResult, RankedOption, compute_results, rank_options
from .store import ProjectStore
from .persistence import PersistenceAdapter
from .share import encode_project, decode_project, ShareService, UrlLocation
from .loader import LoadOrchestrator, LoadResult, LoadSource
from .session import Session, create_session

__all__ = [
    'Option',
    'Criterion',
    'Project',
    'ProjectCollection',
    'OptionResult',
    'RankedOption',
    'compute_results',
    'rank_options',
    'ProjectStore',
    'PersistenceAdapter',
    'encode_project',
    'decode_project',
    'ShareService',
    'UrlLocation',
    'LoadOrchestrator',
    'LoadResult',
    'LoadSource',
    'Session',
    'create_session',
]
