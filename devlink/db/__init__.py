"""Database Infrastructure — declarative base shared by models and alembic.

Invariants:
    - Single async engine per process (initialized via infrastructure.database.init_db)
    - All sessions are async (AsyncSession)
"""
