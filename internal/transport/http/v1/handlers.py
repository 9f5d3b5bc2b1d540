"""
FastAPI HTTP Handlers for Catalog Service API v1.

Implements REST endpoints for catalog item operations. Handlers only map
between HTTP and the use cases; every rule lives in the domain.
"""

from decimal import Decimal
from typing import NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from internal.domain.errors import (
    DomainError,
    DuplicateCodeError,
    InvalidRangeError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from internal.transport.http.dto import (
    CreateItemRequest,
    ErrorResponse,
    ItemListResponse,
    ItemResponse,
    PriceUpdateRequest,
    StatsResponse,
    UpdateItemRequest,
)
from internal.usecase.create_item import CreateItemUseCase
from internal.usecase.query_items import QueryItemsUseCase
from internal.usecase.update_item import UpdateItemUseCase
from pkg.logger.logger import get_logger, get_request_id

logger = get_logger(__name__)


router = APIRouter(prefix="/api/v1", tags=["items"])
system_router = APIRouter(tags=["system"])

_STATUS_BY_ERROR = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidRangeError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateCodeError: status.HTTP_409_CONFLICT,
    RepositoryError: status.HTTP_503_SERVICE_UNAVAILABLE,
}

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    404: {"model": ErrorResponse, "description": "Item not found"},
    503: {"model": ErrorResponse, "description": "Service unavailable"},
}


# Dependency injection container (simplified)
class Dependencies:
    """Container for handler dependencies."""

    create_use_case: Optional[CreateItemUseCase] = None
    update_use_case: Optional[UpdateItemUseCase] = None
    query_use_case: Optional[QueryItemsUseCase] = None


_deps = Dependencies()


def _not_initialized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={"detail": "Service not initialized", "code": "not_initialized"},
    )


def get_create_use_case() -> CreateItemUseCase:
    """Get CreateItemUseCase instance."""
    if _deps.create_use_case is None:
        raise _not_initialized()
    return _deps.create_use_case


def get_update_use_case() -> UpdateItemUseCase:
    """Get UpdateItemUseCase instance."""
    if _deps.update_use_case is None:
        raise _not_initialized()
    return _deps.update_use_case


def get_query_use_case() -> QueryItemsUseCase:
    """Get QueryItemsUseCase instance."""
    if _deps.query_use_case is None:
        raise _not_initialized()
    return _deps.query_use_case


def set_dependencies(
    create_use_case: Optional[CreateItemUseCase],
    update_use_case: Optional[UpdateItemUseCase],
    query_use_case: Optional[QueryItemsUseCase],
) -> None:
    """
    Set handler dependencies.

    Called during application startup.
    """
    _deps.create_use_case = create_use_case
    _deps.update_use_case = update_use_case
    _deps.query_use_case = query_use_case


def _raise_http(error: DomainError) -> NoReturn:
    """
    Translate a domain error into an HTTP error.

    Args:
        error: The domain error raised by a use case.
    """
    status_code = _STATUS_BY_ERROR.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    body = ErrorResponse(
        detail=error.message,
        code=error.code,
        field=getattr(error, "field", None),
        request_id=get_request_id(),
    )
    if status_code >= 500:
        logger.error("Catalog request failed", error=error.message, code=error.code)
    else:
        logger.warning("Catalog request rejected", error=error.message, code=error.code)
    raise HTTPException(status_code=status_code, detail=body.model_dump(exclude_none=True))


# Handlers
@router.post(
    "/items",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_ERROR_RESPONSES,
        409: {"model": ErrorResponse, "description": "Code already registered"},
    },
)
async def create_item(
    request: CreateItemRequest,
    use_case: CreateItemUseCase = Depends(get_create_use_case),
) -> ItemResponse:
    """
    Create a new catalog item.

    Publishes an ``ITEM_CREATED`` event on a best-effort basis.
    """
    try:
        item = await use_case.execute(
            name=request.name,
            code=request.code,
            description=request.description,
            price=request.price,
            category=request.category,
        )
    except DomainError as e:
        _raise_http(e)

    return ItemResponse.from_entity(item)


@router.get(
    "/items/stats",
    response_model=StatsResponse,
    responses=_ERROR_RESPONSES,
)
async def get_stats(
    use_case: QueryItemsUseCase = Depends(get_query_use_case),
) -> StatsResponse:
    """Get total and active item counts."""
    try:
        total = await use_case.count_all()
        active = await use_case.count_active()
    except DomainError as e:
        _raise_http(e)

    return StatsResponse(total_items=total, active_items=active)


@router.get(
    "/items/code/{code}",
    response_model=ItemResponse,
    responses=_ERROR_RESPONSES,
)
async def get_item_by_code(
    code: str = Path(..., description="Item code"),
    use_case: QueryItemsUseCase = Depends(get_query_use_case),
) -> ItemResponse:
    """Get a catalog item by code."""
    try:
        item = await use_case.by_code(code)
    except DomainError as e:
        _raise_http(e)

    return ItemResponse.from_entity(item)


@router.get(
    "/items/{item_id}",
    response_model=ItemResponse,
    responses=_ERROR_RESPONSES,
)
async def get_item(
    item_id: int = Path(..., ge=1, description="Item identifier"),
    use_case: QueryItemsUseCase = Depends(get_query_use_case),
) -> ItemResponse:
    """Get a catalog item by id."""
    try:
        item = await use_case.by_id(item_id)
    except DomainError as e:
        _raise_http(e)

    return ItemResponse.from_entity(item)


@router.get(
    "/items",
    response_model=ItemListResponse,
    responses=_ERROR_RESPONSES,
)
async def list_items(
    category: Optional[str] = Query(None, description="Filter by category"),
    min_price: Optional[Decimal] = Query(None, description="Minimum price"),
    max_price: Optional[Decimal] = Query(None, description="Maximum price"),
    active_only: bool = Query(False, description="Only active items"),
    use_case: QueryItemsUseCase = Depends(get_query_use_case),
) -> ItemListResponse:
    """
    List catalog items.

    Filters are not combined. The first one given wins, in the order
    category, price range, active only. Without filters every item is listed.
    """
    logger.info(
        "Listing items",
        category=category,
        min_price=min_price,
        max_price=max_price,
        active_only=active_only,
    )

    try:
        if category is not None and category.strip():
            items = await use_case.by_category(category)
        elif min_price is not None or max_price is not None:
            items = await use_case.by_price_range(min_price, max_price)
        elif active_only:
            items = await use_case.active()
        else:
            items = await use_case.all()
    except DomainError as e:
        _raise_http(e)

    data = [ItemResponse.from_entity(item) for item in items]
    return ItemListResponse(data=data, total=len(data))


@router.put(
    "/items/{item_id}",
    response_model=ItemResponse,
    responses=_ERROR_RESPONSES,
)
async def update_item(
    request: UpdateItemRequest,
    item_id: int = Path(..., ge=1, description="Item identifier"),
    use_case: UpdateItemUseCase = Depends(get_update_use_case),
) -> ItemResponse:
    """Replace name, description, price and category of an item."""
    try:
        item = await use_case.update_fields(
            item_id,
            name=request.name,
            description=request.description,
            price=request.price,
            category=request.category,
        )
    except DomainError as e:
        _raise_http(e)

    return ItemResponse.from_entity(item)


@router.patch(
    "/items/{item_id}/price",
    response_model=ItemResponse,
    responses=_ERROR_RESPONSES,
)
async def update_item_price(
    request: PriceUpdateRequest,
    item_id: int = Path(..., ge=1, description="Item identifier"),
    use_case: UpdateItemUseCase = Depends(get_update_use_case),
) -> ItemResponse:
    """Change the price of an item."""
    try:
        item = await use_case.update_price(item_id, request.price)
    except DomainError as e:
        _raise_http(e)

    return ItemResponse.from_entity(item)


@router.patch(
    "/items/{item_id}/activate",
    response_model=ItemResponse,
    responses=_ERROR_RESPONSES,
)
async def activate_item(
    item_id: int = Path(..., ge=1, description="Item identifier"),
    use_case: UpdateItemUseCase = Depends(get_update_use_case),
) -> ItemResponse:
    """Mark an item as active."""
    try:
        item = await use_case.activate(item_id)
    except DomainError as e:
        _raise_http(e)

    return ItemResponse.from_entity(item)


@router.patch(
    "/items/{item_id}/deactivate",
    response_model=ItemResponse,
    responses=_ERROR_RESPONSES,
)
async def deactivate_item(
    item_id: int = Path(..., ge=1, description="Item identifier"),
    use_case: UpdateItemUseCase = Depends(get_update_use_case),
) -> ItemResponse:
    """Mark an item as inactive."""
    try:
        item = await use_case.deactivate(item_id)
    except DomainError as e:
        _raise_http(e)

    return ItemResponse.from_entity(item)


@system_router.get("/health")
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns:
        Health status.
    """
    return {"status": "healthy", "service": "catalog-service"}


@system_router.get("/metrics")
async def metrics():
    """
    Prometheus metrics endpoint.

    Returns:
        Prometheus metrics in text format.
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )
