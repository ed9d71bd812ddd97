"""Core backend infrastructure for the Fire Fight backend.

This package contains configuration, logging, database, error and dependency
helpers used by the FastAPI application entrypoint.
"""
