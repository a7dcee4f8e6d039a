"""Translation usage statistics."""
