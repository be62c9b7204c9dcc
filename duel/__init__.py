"""
Duel - Two-player hero duel engine

A deterministic, immutable-state engine for a turn-based duel of heroes,
units and monsters. The engine provides:
- Turn and action-phase state machine with auto-skip
- Targeting and combat resolution
- Shop economy and day/location progression
- A REST API and CLI around in-memory sessions
"""

__version__ = "0.1.0"
