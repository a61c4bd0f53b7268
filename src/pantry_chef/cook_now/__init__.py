"""Pantry Chef - Cook-now matching."""

from pantry_chef.cook_now.classifier import classify
from pantry_chef.cook_now.evaluation import evaluate_cook_now, filter_recipes

__all__ = [
    "classify",
    "evaluate_cook_now",
    "filter_recipes",
]
