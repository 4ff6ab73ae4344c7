"""Application layer: services, aggregation and read models."""
