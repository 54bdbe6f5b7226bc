"""
WSF client library.

A client for the Washington State Ferries (WSF) public API, currently
covering the vessel location feed.
"""
