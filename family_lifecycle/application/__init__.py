"""Application layer: ports, orchestrators and backend services."""
