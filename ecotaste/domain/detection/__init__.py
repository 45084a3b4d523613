"""Food detection: detected-food entity, provider port and failure modes."""
