"""Starlette middleware for request logging and correlation ids."""
