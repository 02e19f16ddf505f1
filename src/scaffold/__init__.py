"""Project scaffolding for create-droid.

Copies the template layers into the destination, patches placeholders,
merges version-catalog entries and writes the companion files. Every step is
safe to re-run on the same destination.
"""
