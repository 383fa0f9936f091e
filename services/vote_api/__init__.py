"""
Cat vs. dog voting service.

This package contains:
- config: environment-driven settings
- models: the Category enum and response models
- database: the MySQL connection pool and the vote queries
- startup: wait-for-database and schema initialization
- main: the FastAPI application and process entry point
"""

__version__ = '1.0.0'
