"""Storage adapters implementing the persistence gateway."""
