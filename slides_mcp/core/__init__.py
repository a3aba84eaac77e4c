"""
Presentation model and request construction.
Pure functions over parsed presentations; nothing here talks to the network.
"""
