"""Pure domain modules: route table and theme configuration.

These modules are free of FastAPI/HTTP concerns so they can be unit-tested
and reused by both the server and the build runner.
"""
__all__ = ["routes", "theme"]
