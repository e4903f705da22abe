"""
Meowbrain - Memory Module
Short-term memory of recent positions, behaviors and collisions.
"""

from .short_term_memory import Memory, advance_memory, record_interaction

__all__ = [
    "Memory",
    "advance_memory",
    "record_interaction",
]
