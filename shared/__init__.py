# ============================================================================
# shared/__init__.py - Database, logging and auth helpers used by every app
# ============================================================================
