"""
Vendored tree sync — profiles describing each vendored tree and the runner
that applies them.
"""
