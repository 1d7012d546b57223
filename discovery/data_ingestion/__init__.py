"""
Dataset preparation package.

Responsibilities:
- Read the combined master dataset of scraped places.
- Group rows into metro cities by their district or city field.
- Write one MasterSet_<city>.json resource per metro for the query engine.
"""
