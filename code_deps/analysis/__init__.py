"""Dependency analysis: resolution, caching, graph assembly and cycle detection."""
