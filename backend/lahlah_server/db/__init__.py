"""Database Artifacts — the packaged DDL (schema.sql) and its parsed form.

Invariants:
    - schema.sql is data, not code; SchemaDocument is its only reader
"""
