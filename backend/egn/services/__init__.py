"""Services Layer - orchestration around the pure core.

Invariants:
    - Services call into core/, never the other way round
"""
