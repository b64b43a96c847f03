"""
Invoice Assistant backend.

FastAPI service that lists QuickBooks Online invoices (or a demo dataset when
no company is connected), exposes a small catalog of invoice tools and answers
chat questions about invoices with a pattern-based responder.
"""

__version__ = "0.1.0"
