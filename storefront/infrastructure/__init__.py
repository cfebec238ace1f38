"""Infrastructure module.

Configuration, database session management and logging setup.
"""
