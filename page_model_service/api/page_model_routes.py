"""Page model routes.

Server render pass endpoints: fetch a page model (returning the hand-off
state alongside it) and apply component property updates.
"""

from __future__ import annotations

from typing import NoReturn

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, HTTPException, Request, status

from page_model_service.dto.page_model_v1 import PageModelResponseV1
from page_model_service.error_handling import ErrorCode, PageModelError
from page_model_service.gateway import PageModelGateway
from page_model_service.implementations.transfer_state import InMemoryTransferState
from page_model_service.logging_utils import create_service_logger

router = APIRouter()
logger = create_service_logger("page_model.routes")


def _raise_gateway_error(error: PageModelError) -> NoReturn:
    status_code = (
        status.HTTP_504_GATEWAY_TIMEOUT
        if error.error_code == ErrorCode.TIMEOUT
        else status.HTTP_502_BAD_GATEWAY
    )
    raise HTTPException(status_code=status_code, detail=error.model_dump(mode="json"))


@router.post(
    "/_components/{component_id}/{page_path:path}",
    response_model=PageModelResponseV1,
)
@inject
async def update_page_component(
    component_id: str,
    page_path: str,
    request: Request,
    gateway: FromDishka[PageModelGateway],
) -> PageModelResponseV1:
    """Apply form-encoded property updates to one component of a page.

    The response carries no hand-off state: the client already holds the page
    and only needs the merged model.
    """
    form = await request.form()
    properties = {key: value for key, value in form.items() if isinstance(value, str)}

    fetched = await gateway.fetch_page_model()
    if fetched.is_err:
        _raise_gateway_error(fetched.error)

    updated = await gateway.update_component(component_id, properties)
    if updated.is_err:
        _raise_gateway_error(updated.error)

    logger.info(
        "Component updated",
        component_id=component_id,
        page_path=page_path,
        property_count=len(properties),
    )

    return PageModelResponseV1(page_model=updated.value.to_document())


@router.get("/{page_path:path}", response_model=PageModelResponseV1)
@inject
async def get_page_model(
    page_path: str,
    gateway: FromDishka[PageModelGateway],
    transfer_state: FromDishka[InMemoryTransferState],
) -> PageModelResponseV1:
    """Fetch the page model for ``page_path`` for a server-side render."""
    result = await gateway.fetch_page_model()
    if result.is_err:
        _raise_gateway_error(result.error)

    return PageModelResponseV1(
        page_model=result.value.to_document(),
        transfer_state=transfer_state.to_dict(),
    )
