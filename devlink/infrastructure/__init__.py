"""Infrastructure Layer — storage, credentials, external clients and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external calls wrapped with timeout/error mapping

Design Decisions:
    - Resilient wrappers over raw clients
"""
