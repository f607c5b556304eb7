"""Delete item use case."""

from pydantic import BaseModel

from newsboard.domain.error import NotAuthorizedError, NotFoundError
from newsboard.domain.model import RequestContext
from newsboard.domain.service import ItemService
from newsboard.domain.value import ItemId


class DeleteItemRequest(BaseModel):
    """Delete item request."""

    context: RequestContext
    item_id: int


class DeleteItemResponse(BaseModel):
    """Delete item response."""

    item_id: int


class DeleteItemUseCase:
    """Use case for soft-deleting an item."""

    def __init__(self, item_service: ItemService) -> None:
        self.item_service = item_service

    async def execute(self, request: DeleteItemRequest) -> DeleteItemResponse:
        """Execute delete flow.

        Raises:
            NotAuthorizedError: Anonymous, or outside the edit policy
            RateLimitedError: Delete throttle active for this client
            NotFoundError: Item doesn't exist
        """
        if request.context.user is None:
            raise NotAuthorizedError("item", str(request.item_id), None)

        deleted = await self.item_service.delete_item(
            request.context, ItemId(request.item_id)
        )
        if not deleted:
            raise NotFoundError("Item", str(request.item_id))
        return DeleteItemResponse(item_id=request.item_id)
