"""
Run the formquota API server.

Usage:
    python -m formquota --port 8000
    python -m formquota --backend memory
    python -m formquota --init-schema
"""
import argparse
import asyncio
import logging

import uvicorn

from formquota.config import get_settings
from formquota.config.database import create_postgres_pool
from formquota.repositories.schema import ensure_schema


async def init_schema(settings) -> None:
    db_pool = await create_postgres_pool(settings)
    try:
        await ensure_schema(db_pool)
    finally:
        await db_pool.close()


def main():
    parser = argparse.ArgumentParser(description="formquota API server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    parser.add_argument("--port", type=int, default=8000, help="Bind port")
    parser.add_argument("--backend", choices=["postgres", "memory"], help="Override STORE_BACKEND")
    parser.add_argument("--init-schema", action="store_true",
                        help="Create PostgreSQL tables and exit")
    args = parser.parse_args()

    settings = get_settings()
    if args.backend:
        settings = settings.model_copy(update={"store_backend": args.backend})

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s [%(name)s] %(levelname)s: %(message)s'
    )

    if args.init_schema:
        asyncio.run(init_schema(settings))
        print("✅ Schema created")
        return

    from formquota.main import create_app
    uvicorn.run(create_app(settings), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
