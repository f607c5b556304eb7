"""Get item use case (item page with its thread)."""

import logfire
from pydantic import BaseModel

from newsboard.domain.model import ItemView, RequestContext
from newsboard.domain.service import CommentService, ItemService, RankingService
from newsboard.domain.value import ItemId

from newsboard.application.usecase.comment.common import ThreadEntry, to_entries


class GetItemRequest(BaseModel):
    """Get item request."""

    context: RequestContext
    item_id: int


class GetItemResponse(BaseModel):
    """Get item response."""

    item: ItemView
    comments: list[ThreadEntry]


class GetItemUseCase:
    """Use case for the single item view.

    The stored rank is lazily corrected here, since a single read is cheap.
    """

    def __init__(
        self,
        item_service: ItemService,
        ranking_service: RankingService,
        comment_service: CommentService,
    ) -> None:
        """Initialize get item use case.

        Args:
            item_service: Item domain service
            ranking_service: Ranking domain service
            comment_service: Comment domain service
        """
        self.item_service = item_service
        self.ranking_service = ranking_service
        self.comment_service = comment_service

    async def execute(self, request: GetItemRequest) -> GetItemResponse | None:
        """Execute get item flow.

        Returns:
            Annotated item and its rendered thread, None if the item
            doesn't exist or is deleted
        """
        with logfire.span("get_item.execute", item_id=request.item_id):
            item = await self.item_service.get_item(ItemId(request.item_id))
            if item is None or item.deleted:
                return None

            [view] = await self.item_service.annotate([item], request.context.user_id)
            item = await self.ranking_service.update_rank_if_needed(
                item, view.counts
            )
            view = view.model_copy(update={"item": item})

            thread = await self.comment_service.render(item.id)
            return GetItemResponse(item=view, comments=to_entries(thread))
