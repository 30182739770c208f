"""Infrastructure Layer - store access and cross-cutting concerns.

Invariants:
    - Infrastructure owns all SQL; nothing above it builds queries
"""
