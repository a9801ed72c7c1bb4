"""
HTTP API for Sazan.
"""
