"""
Meowbrain - Behavior decision engine for autonomous on-screen cats.
"""

__version__ = "0.1.0"
