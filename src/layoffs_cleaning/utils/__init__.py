"""Shared utilities for logging and content hashing."""
