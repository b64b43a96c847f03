"""
FastAPI routers for all API endpoints.

Each module defines a router for one concern (invoices, chat, tools, auth,
health). Routers only translate HTTP to service calls; invoice logic lives in
services/ and agents/.
"""
