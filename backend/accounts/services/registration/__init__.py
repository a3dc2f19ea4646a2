"""Self-registration use case: DTOs, validator and orchestrating service."""
