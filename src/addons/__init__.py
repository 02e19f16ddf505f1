"""Addon recipes: declarative edits that add a library to a generated project."""

from src.addons.installer import AddonInstaller
from src.addons.recipes import AddonRecipe, RecipeRegistry, builtin_registry
from src.addons.resolver import RecipeResolver

__all__ = [
    "AddonInstaller",
    "AddonRecipe",
    "RecipeRegistry",
    "RecipeResolver",
    "builtin_registry",
]
