"""Recognition of vault marker signs."""
