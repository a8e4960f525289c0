"""
HTTP routers for the Royal Shelf application
"""
