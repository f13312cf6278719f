"""
Core — cross-cutting error taxonomy shared by the transfer pipeline and the API server.
"""
