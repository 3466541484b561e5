"""Boundary adapters: database, Amazon SP-API, Xero."""
