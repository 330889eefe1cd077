"""
Core business logic modules for RecruitCRM search.

Submodules:
- exceptions: Error hierarchy shared by the pipeline and the API
- search: Search documents, semantic search and the embedding pipeline
"""
