"""
Schemas package - Data Transfer Objects for the HTTP API.
"""
