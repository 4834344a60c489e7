"""Page Model Service.

Fetches page models from the content-management backend, hands them from the
server rendering pass to the client rendering pass and applies partial
component updates.
"""

from page_model_service.gateway import PageModelGateway
from page_model_service.result import Result

__all__ = ["PageModelGateway", "Result"]
