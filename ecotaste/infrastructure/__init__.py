"""Infrastructure adapters: persistence, detection provider, auth, event bus."""
