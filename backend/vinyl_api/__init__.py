"""Vinyl Collection API Package - record-management HTTP API for a vinyl collection.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
