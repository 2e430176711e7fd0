"""Adapters around the core: parsing, generation, HTTP, cache and output."""
