from .catalogue import ItemResponse, PageResponse

__all__ = ["ItemResponse", "PageResponse"]
