import asyncio
import uvicorn

from shared.core.config import settings


async def start_servers():
    # Auth service
    config1 = uvicorn.Config(
        "auth_service.app.main:app",
        host="0.0.0.0",
        port=settings.AUTH_SERVICE_PORT,
        reload=True,
    )
    server1 = uvicorn.Server(config1)

    # Inventory service
    config2 = uvicorn.Config(
        "inventory_service.app.main:app",
        host="0.0.0.0",
        port=settings.INVENTORY_SERVICE_PORT,
        reload=True,
    )
    server2 = uvicorn.Server(config2)

    # Run both servers concurrently
    await asyncio.gather(
        server1.serve(),
        server2.serve(),
    )

if __name__ == "__main__":
    try:
        asyncio.run(start_servers())
    except KeyboardInterrupt:
        print("\nShutting down servers...")
