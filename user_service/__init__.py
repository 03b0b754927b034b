"""User Service — layered CRUD API for user records.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
