"""FastAPI application."""

import argparse
from typing import Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from priceright.configs import settings
from priceright.controllers.price_controllers import price_router
from priceright.logger_config import get_logger

logger = get_logger("priceright.app")
get_logger("price_search")

logger.info("Starting FastAPI application...")
app = FastAPI(
    title="PriceRight API",
    root_path=settings.ROOT_PATH_BACKEND,
    description=(
        f"Product price comparison with shipping to {settings.TARGET_REGION}, "
        f"prices in {settings.CANONICAL_CURRENCY}."
    ),
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["*"],
)
app.include_router(price_router)


@app.get("/", response_description="Api healthcheck")  # type: ignore[misc]
async def index() -> Dict[str, str]:
    """Define a route for handling HTTP GET requests to the root URL ("/")."""
    return {"status": "ok"}


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--docker", action="store_true", help="Running with docker")
    parser.add_argument("--host", default="127.0.0.1", help="Application host.")
    parser.add_argument("--port", default="8000", help="Application port.")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development purposes.",
    )
    args = parser.parse_args()
    if not args.docker:
        from dotenv import load_dotenv

        load_dotenv(".env")

    import uvicorn

    uvicorn.run(
        "priceright.app:app", host=args.host, port=int(args.port), reload=args.reload
    )


if __name__ == "__main__":
    main()
