"""Start-up settings for the currency engine."""
