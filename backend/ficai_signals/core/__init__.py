"""Pure domain logic: identity and value types, errors, patch planning, tag ranking.

Nothing here performs IO or imports from services/, api/, infrastructure/ or db/.
"""
