"""
Local point-of-interest query engine.

Responsibilities:
- Load one city's place dataset and keep it cached in memory.
- Filter places by category, rating, price, neighborhood and open status.
- Rank places by great-circle distance from a reference point.
- Serve paginated, searchable and sampled views of the active dataset.
"""
