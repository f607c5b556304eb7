"""Submit item use case (create or edit)."""

import logfire
from pydantic import BaseModel

from newsboard.domain.error import NotAuthorizedError, NotFoundError, RateLimitedError
from newsboard.domain.model import RequestContext
from newsboard.domain.service import ItemService
from newsboard.domain.value import NEW_ID, ItemId


class SubmitItemRequest(BaseModel):
    """Submit item request.

    ``item_id == -1`` submits a new item, any other id edits that item.
    """

    context: RequestContext
    title: str
    url: str = ""
    text: str = ""
    item_id: int = NEW_ID


class SubmitItemResponse(BaseModel):
    """Submit item response."""

    item_id: int
    created: bool  # False for edits and for reposts within the window


class SubmitItemUseCase:
    """Use case for submitting or editing an item."""

    def __init__(self, item_service: ItemService) -> None:
        """Initialize submit item use case.

        Args:
            item_service: Item domain service
        """
        self.item_service = item_service

    async def execute(self, request: SubmitItemRequest) -> SubmitItemResponse:
        """Execute submit flow.

        Args:
            request: Submission with the request context

        Returns:
            Id of the created, reused or edited item

        Raises:
            NotAuthorizedError: Anonymous context, or edit outside policy
            RateLimitedError: Submission cooldown or edit throttle active
            ValidationError: Malformed title, url or text
            NotFoundError: Edited item doesn't exist
        """
        ctx = request.context
        with logfire.span("submit_item.execute", item_id=request.item_id):
            if ctx.user is None:
                raise NotAuthorizedError("item", str(request.item_id), None)

            if request.item_id == NEW_ID:
                wait = await self.item_service.allowed_to_post_in_seconds(ctx)
                if wait > 0:
                    raise RateLimitedError("submit", wait)

                item_id, created = await self.item_service.insert_item(
                    ctx.user, request.title, request.url, request.text
                )
                return SubmitItemResponse(item_id=item_id, created=created)

            updated = await self.item_service.edit_item(
                ctx, ItemId(request.item_id), request.title, request.url, request.text
            )
            if updated is None:
                raise NotFoundError("Item", str(request.item_id))
            return SubmitItemResponse(item_id=updated.id, created=False)
