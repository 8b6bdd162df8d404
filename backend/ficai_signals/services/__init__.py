"""Services Layer: the four components behind the HTTP surface.

Invariants:
    - Each mutating operation commits exactly once, or rolls back
    - Services take an AsyncSession and explicit collaborators (hasher, lookup
      source, scorer); no service reads settings or module globals

Design Decisions:
    - Module-level async functions, one module per component:
      credential_store, signal_ledger, tag_directory, fic_resolver
"""
