"""Application package for the course management backend.

This package exposes the service, repository, mapping and model modules
used by the FastAPI application. Individual modules contain the concrete
implementations and documentation.
"""
