"""
The `core` package holds the service layer: transactional functions that
connect the API routers with the DAOs.
"""
