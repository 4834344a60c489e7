"""Page Model Service clients module.

Contains the HTTP transport used to reach the delivery API.
"""

from page_model_service.clients.httpx_transport import HttpxTransport

__all__ = ["HttpxTransport"]
