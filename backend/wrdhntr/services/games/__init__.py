"""Game domain services: letters, word legality, scoring, claims,
sessions and round timers.

This package contains the in-memory game engine that HTTP routes and
socket handlers call into, keeping transport concerns separated from
core game mechanics.
"""
