"""Possession (owner <-> vehicle) data access for the cartes-grises application."""

__version__ = "0.1.0"
