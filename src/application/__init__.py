"""Application layer - lookup services and hydration use cases."""
