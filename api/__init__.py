"""
HTTP API for the SQL viewer.
"""
