"""
Application commands.
"""
