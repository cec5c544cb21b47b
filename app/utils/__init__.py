"""Small helpers shared by the handlers."""
