"""Placeholder product images for records without a scraped image."""

from __future__ import annotations

import zlib
from typing import Dict, Tuple

IMAGE_BASE_URL = "https://images.unsplash.com/photo-"
IMAGE_PARAMS = "?auto=format&fit=crop&w=400&h=400&q=80"

CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (
        "electronics",
        ("phone", "laptop", "computer", "electronic", "headphones", "ipad", "macbook"),
    ),
    (
        "fashion",
        ("shoes", "sneaker", "jordan", "shirt", "dress", "fashion", "clothing", "watch", "bag", "jacket"),
    ),
    ("home", ("furniture", "home", "kitchen", "decor", "chair", "table")),
    ("sports", ("sport", "fitness", "gym", "ball", "running", "exercise")),
    ("books", ("book", "novel", "magazine", "education")),
)

CATEGORY_IMAGES: Dict[str, Tuple[str, ...]] = {
    "electronics": (
        "1560472354-a5b8c6ce0a40",
        "1587831990-6e1b4d12ebcd",
        "1565036522-5c35cd6c7936",
        "1542751371-adc38448a05e",
    ),
    "fashion": (
        "1441986300917-64674bd600d8",
        "1434389677669-e08b4cac3105",
        "1485462537746-965f33f7f6a7",
        "1533060836206-3c3c4a2d5ae0",
    ),
    "home": (
        "1586023492031-74992e9b7b2e",
        "1558618666-fca92c82b9c4",
        "1493663284031-2e166c293af2",
    ),
    "sports": (
        "1571008887538-b36bb32f4571",
        "1571019613454-1cb2f99b2d8b",
        "1578662996442-6cf58ac0e7b4",
    ),
    "books": (
        "1481627834876-b7833e8f5570",
        "1512820790803-83ca734da794",
        "1524995997946-a2c2e315a42f",
    ),
    "default": (
        "1556909114-f6e7ad7d3136",
        "1505740420928-5e560c06d30e",
        "1472851294608-c4d3c4e10ca1",
        "1563013544-824ae1b704d3",
    ),
}

PLATFORM_FALLBACK_IMAGES = {
    "eBay": "https://i.ebayimg.com/images/g/placeholder/s-l400.jpg",
    "Amazon US": "https://m.media-amazon.com/images/I/placeholder.jpg",
    "Target": "https://target.scene7.com/is/image/Target/placeholder",
    "StockX": "https://images.stockx.com/images/placeholder.jpg",
    "Farfetch": "https://cdn-images.farfetch-contents.com/placeholder.jpg",
}
DEFAULT_FALLBACK_IMAGE = "https://via.placeholder.com/400x400.png?text=Product+Image"


def categorize_query(query: str) -> str:
    lowered = query.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return "default"


def product_image(query: str, platform: str) -> str:
    """Pick a stable category image for a query/platform pair."""
    images = CATEGORY_IMAGES[categorize_query(query)]
    index = zlib.crc32(f"{query}{platform}".encode("utf-8")) % len(images)
    return f"{IMAGE_BASE_URL}{images[index]}{IMAGE_PARAMS}"


def platform_fallback_image(platform: str) -> str:
    return PLATFORM_FALLBACK_IMAGES.get(platform, DEFAULT_FALLBACK_IMAGE)
