"""HTTP surface for permission checks and navigation."""
