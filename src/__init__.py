"""create-droid: scaffold Android projects from file templates."""

__version__ = "0.1.0"
