"""
Command groups for the vendorsync CLI.
"""
