"""Flask front end for the acronym lookup service."""
from .web import app, main

__all__ = ["app", "main"]
