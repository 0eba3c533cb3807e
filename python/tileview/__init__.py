"""Terminal front end for the tile puzzle solver."""
