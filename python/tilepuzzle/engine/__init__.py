"""Puzzle engine: transitions, scrambling and solving."""
