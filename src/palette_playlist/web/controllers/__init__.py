"""
API route controllers.
"""
