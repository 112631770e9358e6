"""Application layer: business logic services."""
