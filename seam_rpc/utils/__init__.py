"""
Utility helpers shared by the transport adapters.
"""
