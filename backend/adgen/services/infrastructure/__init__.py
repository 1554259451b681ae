"""Infrastructure adapters - external services behind the generation and chat ports."""
