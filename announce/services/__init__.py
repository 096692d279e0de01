"""Routing, request building and dispatch."""
