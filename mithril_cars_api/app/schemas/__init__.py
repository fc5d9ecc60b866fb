"""
Pydantic schema definitions for API payloads.

Each resource defines a write record (the allow-listed fields a client
may set) and a read model (what the API returns).  Write records are
what reaches the database layer; raw request bodies never do.
"""
