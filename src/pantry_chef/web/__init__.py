"""Pantry Chef Web API."""
