"""Game domain services: rooms, guesses, drawing and identity.

These take a store as their first argument and are imported by HTTP routes
and the room session, keeping transport concerns separated from core game
mechanics.
"""
