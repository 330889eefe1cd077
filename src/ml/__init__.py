"""
Machine Learning modules for RecruitCRM search.

Submodules:
- nlp: Résumé text extraction and cleaning
- embeddings: Embedding provider client, stored-vector normalization and similarity
"""
