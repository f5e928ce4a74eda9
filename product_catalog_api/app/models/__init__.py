"""
Domain entities.

Entities are plain dataclasses that the repositories persist.  They are
kept apart from the Pydantic schemas so that the stored representation
can evolve independently of the JSON exchanged over HTTP.
"""
