"""
HTTP Adapter Package

Implements the JSON-RPC 2.0 client adapter over HTTP POST.
"""

from seam_rpc.adapters.http.client import HttpClient, interpret_response

__all__ = ["HttpClient", "interpret_response"]
