"""Levelboard - catalog and creator leaderboards for curator-rated levels."""
