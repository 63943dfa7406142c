"""Clients for the document store's data API."""
