"""Host item abstraction consumed by the currency engine."""
