"""
Meowbrain - Cognition
Personality, motivation, memory and behavior selection.
"""
