"""Impostor - a pass-and-play social deduction game."""
