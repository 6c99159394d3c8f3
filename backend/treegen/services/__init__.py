"""
Services Layer

Tree generation for championships:
- Pure generation modules accept rosters and settings snapshots and return
  immutable GenerationResult values (no sessions, no clock, no randomness)
- championship_store is the only module that touches the database
"""
