"""
vendorsync — synchronize vendored third-party source trees with upstream checkouts.
"""
