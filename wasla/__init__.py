"""
Wasla (وصلة) - ISP subscriber management API.
"""
