"""Domain exceptions and identifier helpers shared by the API and storage layers."""
