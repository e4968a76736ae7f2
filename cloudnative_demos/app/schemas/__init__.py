"""
Pydantic schema definitions for payloads exchanged with external
collaborators such as the config server.
"""
