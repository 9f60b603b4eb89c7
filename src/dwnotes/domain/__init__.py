"""Domain layer — date formatting, paths, and link computation.

This layer depends only on the stdlib and :mod:`dwnotes.errors`.
Config models are referenced for type checking only.
"""
