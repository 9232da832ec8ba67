"""Terminal and dashboard output."""
