"""Core Layer — error types and classification, no IO.

Invariants:
    - No module in core/ imports from api/, infrastructure/, or db/
"""
