"""Expose the price search pipeline over HTTP.

The UI calls these endpoints and renders whatever records come back.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from priceright.services.price_search.models import NormalizedPriceRecord
from priceright.services.price_search.service import (
    PriceSearchService,
    get_price_search_service,
)

price_router = APIRouter(prefix="/prices", tags=["Prices"])


@price_router.get(
    "/search",
    response_model=List[NormalizedPriceRecord],
    responses={
        200: {"description": "One record per requested platform."},
    },
)
def search_prices(
    q: str = Query(..., min_length=1, description="Product to search for."),
    platforms: Optional[List[str]] = Query(
        None, description="Platform names to restrict the search to."
    ),
    service: PriceSearchService = Depends(get_price_search_service),
) -> List[NormalizedPriceRecord]:
    """
    Search prices for a product.

    Args:
        q (str): Free-text product query.
        platforms (List[str], optional): Subset of platform names. Unknown
        names are ignored; when omitted every platform is searched.

    Returns:
        List[NormalizedPriceRecord]: One record per searched platform.
    """
    if not q.strip():
        raise HTTPException(
            status_code=422,
            detail="Query must not be blank.",
        )
    if platforms:
        return service.search_specific(q, platforms)
    return service.search_all(q)


@price_router.get("/platforms")
def list_platforms(
    service: PriceSearchService = Depends(get_price_search_service),
) -> List[str]:
    """Names accepted by the ``platforms`` filter."""
    return service.registry.names()
