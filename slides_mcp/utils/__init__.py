"""
Configuration, logging, errors, validation and authentication.
"""
