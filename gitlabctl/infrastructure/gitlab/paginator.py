"""Walks a page-numbered GitLab list endpoint to completion."""
import logging
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from gitlabctl.errors import DecodeError
from gitlabctl.infrastructure.gitlab.base_client import BaseGitLabClient

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

NEXT_PAGE_HEADER = "X-Next-Page"


async def paginate(
    client: BaseGitLabClient,
    path: str,
    model: Type[T],
    page_size: int = 100,
    params: Optional[Mapping[str, Any]] = None,
    extra_fields: Optional[Mapping[str, Any]] = None,
) -> AsyncIterator[T]:
    """
    Yield every item of a paginated list endpoint, decoded into ``model``.

    Pages are requested one after another until the ``X-Next-Page`` header
    is missing or empty, or a page comes back with no items. The number of
    items per page is whatever the server returns, not ``page_size``.

    Args:
        client: client used to issue the requests
        path: API path relative to the client's base URL
        model: pydantic model every item is validated into
        page_size: requested ``per_page``
        params: extra query parameters sent with every page
        extra_fields: values merged into each item before validation

    Raises:
        TransportError: a page request failed
        DecodeError: a page body is not a JSON array of ``model`` items
    """
    page = 1
    while True:
        query: Dict[str, Any] = dict(params or {})
        query.update(page=page, per_page=page_size)
        response = await client._make_request("GET", path, params=query)
        body = client._decode_json(response)
        if not isinstance(body, list):
            raise DecodeError(
                f"Expected a JSON array from {response.request.url}, got {type(body).__name__}",
                url=str(response.request.url),
            )

        logger.debug(f"{path}: page {page} has {len(body)} items")
        if not body:
            return

        for item in body:
            yield _decode_item(model, item, extra_fields, str(response.request.url))

        next_page = response.headers.get(NEXT_PAGE_HEADER, "").strip()
        if not next_page:
            return
        try:
            following = int(next_page)
        except ValueError as e:
            raise DecodeError(
                f"Invalid {NEXT_PAGE_HEADER} header {next_page!r} from {response.request.url}",
                url=str(response.request.url),
            ) from e
        # A next page that does not move forward would loop forever
        if following <= page:
            raise DecodeError(
                f"{NEXT_PAGE_HEADER} header {following} does not advance past page {page}",
                url=str(response.request.url),
            )
        page = following


def _decode_item(model: Type[T], item: Any, extra_fields: Optional[Mapping[str, Any]], url: str) -> T:
    if not isinstance(item, dict):
        raise DecodeError(f"Expected a JSON object in page from {url}, got {type(item).__name__}", url=url)
    if extra_fields:
        item = {**item, **extra_fields}
    try:
        return model.model_validate(item)
    except ValidationError as e:
        raise DecodeError(f"Could not decode {model.__name__} from {url}: {e}", url=url) from e


async def collect(items: AsyncIterator[T]) -> List[T]:
    """Drain a paginated sequence; a failure on any page discards everything fetched so far."""
    return [item async for item in items]
