"""
RecruitCRM candidate semantic search.

Résumé extraction, candidate embeddings and embedding-based search for a
recruitment CRM.
"""

from src.utils.constants import APP_NAME, VERSION

__version__ = VERSION
__app_name__ = APP_NAME
