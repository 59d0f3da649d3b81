"""
HTTP API layer for the Health Score Service.
"""
