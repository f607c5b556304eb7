"""Item use cases."""

from .delete_item import DeleteItemRequest, DeleteItemResponse, DeleteItemUseCase
from .get_item import GetItemRequest, GetItemResponse, GetItemUseCase
from .list_items import ItemListing, ListItemsRequest, ListItemsUseCase
from .submit_item import SubmitItemRequest, SubmitItemResponse, SubmitItemUseCase

__all__ = [
    "DeleteItemRequest",
    "DeleteItemResponse",
    "DeleteItemUseCase",
    "GetItemRequest",
    "GetItemResponse",
    "GetItemUseCase",
    "ItemListing",
    "ListItemsRequest",
    "ListItemsUseCase",
    "SubmitItemRequest",
    "SubmitItemResponse",
    "SubmitItemUseCase",
]
