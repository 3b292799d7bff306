"""HTTP layer for Whot!."""
