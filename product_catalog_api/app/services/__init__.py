"""
Service layer abstraction.

Each service encapsulates the business logic for a domain and talks to
storage only through a repository, so the backend can be swapped
without changing the API handlers.
"""
