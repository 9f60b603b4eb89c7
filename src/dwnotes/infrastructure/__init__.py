"""Infrastructure layer — vault filesystem access and template loading.

This layer depends on stdlib and third-party libs (Jinja2, Click).
The service layer bridges between domain functions and infrastructure.
"""
