"""Persistent disk migration: workflows, validation, discovery, migration and reports."""

__version__ = "0.1.0"