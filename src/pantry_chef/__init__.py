"""
Pantry Chef - pantry-aware recipe recommendations.

Cook-now matching against the user's pantry, plus AI provider fallback chains
for recipe metadata, cook-now narratives and dish images.
"""

__version__ = "1.0.0"
