"""Core Layer — entities, errors, cursor codec and boundary protocols.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - No IO: the only async code here is Protocol signatures
"""
