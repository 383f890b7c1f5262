"""
Interface layer - operator CLI.
"""
