"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - All driver exceptions leave this layer classified (core/errors.py)
"""
