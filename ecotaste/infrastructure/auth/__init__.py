"""Token verification and request authentication."""
