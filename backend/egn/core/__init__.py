"""Core Layer - pure EGN logic, no IO, no async, no framework imports.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - Lookup tables are immutable and safe to share between threads
    - Randomness enters only through the generator's injected rng
"""
