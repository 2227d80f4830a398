"""
Fog of Secrets - client for the encrypted/public position map
"""
