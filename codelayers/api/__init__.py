"""
HTTP API over the layer index.
"""
