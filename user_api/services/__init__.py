"""
Use cases for the user account service.

Each service orchestrates a UserStore and the core helpers to implement the
business rules. Routers call services instead of touching the store directly.
"""
