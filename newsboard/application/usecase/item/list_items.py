"""List items use case (top, latest, saved, per-user)."""

from enum import Enum

import logfire
from pydantic import BaseModel

from newsboard.config import Settings
from newsboard.domain.error import NotAuthorizedError
from newsboard.domain.model import Item, ItemView, RequestContext
from newsboard.domain.repository import ItemRepository
from newsboard.domain.service import ItemService, UserService

from newsboard.application.pagination import Page, Paginator


class ItemListing(str, Enum):
    """Available item listings."""

    TOP = "top"
    LATEST = "latest"
    SAVED = "saved"  # Items the context user upvoted
    USER = "user"  # Items submitted by ``username``


DEFAULT_LINKS = {
    ItemListing.TOP: "/top/$",
    ItemListing.LATEST: "/latest/$",
    ItemListing.SAVED: "/saved/$",
    ItemListing.USER: "/usernews/{username}/$",
}


class ListItemsRequest(BaseModel):
    """List items request."""

    context: RequestContext
    listing: ItemListing = ItemListing.TOP
    start: int = 0
    username: str | None = None  # Required for ItemListing.USER
    link_template: str | None = None  # Defaults per listing


class ListItemsUseCase:
    """Use case for paginated item listings.

    Listings read the stored rank as is; they never reconcile it.
    """

    def __init__(
        self,
        item_repository: ItemRepository,
        item_service: ItemService,
        user_service: UserService,
        settings: Settings,
    ) -> None:
        """Initialize list items use case.

        Args:
            item_repository: Item repository
            item_service: Item domain service (annotation)
            user_service: User domain service (username lookup)
            settings: Application settings (page sizes)
        """
        self.item_repository = item_repository
        self.item_service = item_service
        self.user_service = user_service
        self.pagination = settings.pagination

    async def execute(self, request: ListItemsRequest) -> Page[ItemView] | None:
        """Execute list items flow.

        Returns:
            The requested page, or None for a user listing of an unknown user

        Raises:
            NotAuthorizedError: Saved listing without an authenticated user
        """
        ctx = request.context
        with logfire.span(
            "list_items.execute", listing=request.listing.value, start=request.start
        ):
            repo = self.item_repository
            link = request.link_template or DEFAULT_LINKS[request.listing]

            if request.listing == ItemListing.TOP:
                per_page = self.pagination.top_per_page

                async def fetch(start: int, count: int) -> tuple[list[Item], int]:
                    return await repo.find_top(count, start), await repo.count()

            elif request.listing == ItemListing.LATEST:
                per_page = self.pagination.latest_per_page

                async def fetch(start: int, count: int) -> tuple[list[Item], int]:
                    return await repo.find_latest(count, start), await repo.count()

            elif request.listing == ItemListing.SAVED:
                user_id = ctx.user_id
                if user_id is None:
                    raise NotAuthorizedError("saved", "items", None)
                per_page = self.pagination.saved_per_page

                async def fetch(start: int, count: int) -> tuple[list[Item], int]:
                    return (
                        await repo.find_saved(user_id, count, start),
                        await repo.count_saved(user_id),
                    )

            else:
                owner = await self.user_service.get_by_username(request.username or "")
                if owner is None:
                    return None
                per_page = self.pagination.user_news_per_page
                link = link.replace("{username}", str(owner.username))

                async def fetch(start: int, count: int) -> tuple[list[Item], int]:
                    return (
                        await repo.find_by_author(owner.id, count, start),
                        await repo.count(author_id=owner.id),
                    )

            async def fetch_annotated(
                start: int, count: int
            ) -> tuple[list[ItemView], int]:
                items, total = await fetch(start, count)
                return await self.item_service.annotate(items, ctx.user_id), total

            page = await Paginator(fetch_annotated, link, per_page).page(request.start)
            logfire.info("Items listed", count=len(page.items), total=page.total)
            return page
