"""
Data normalization layer for layoff records.

Handles column naming, text and categorical cleanup, and date parsing
to ensure a consistent record representation.
"""
