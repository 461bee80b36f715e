"""
Platform layer: error contract and runtime configuration shared by all value objects.
"""
