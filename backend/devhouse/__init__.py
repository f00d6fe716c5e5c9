"""Application package for the DevHouse organisation API.

This package exposes the service, repository and model modules used by
the FastAPI application that manages developers, teams, roles, projects
and project types. Individual modules contain the concrete
implementations and documentation.
"""
