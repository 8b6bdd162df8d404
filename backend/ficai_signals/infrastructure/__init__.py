"""Infrastructure Layer: database, external lookup client, hashing, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external calls wrapped with timeout and error mapping
"""
