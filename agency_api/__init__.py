"""
Agency management API.
Client portal backend: projects, invoices, notifications, messages and web push.
"""

__version__ = "1.0.0"
