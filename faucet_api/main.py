import logging
from datetime import datetime, timezone
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from faucet_api.config.settings import HOST, PORT, LOG_LEVEL
from faucet_api.middleware.cors import setup_cors
from faucet_api.models.schemas import HealthResponse
from faucet_api.routes import faucet
from faucet_api.utils.errors import setup_error_handlers


def create_app() -> FastAPI:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Faucet API")

    setup_cors(app)
    setup_error_handlers(app)
    app.add_exception_handler(StarletteHTTPException, faucet.faucet_http_error_handler)

    # Mount routes
    app.include_router(faucet.router, prefix="/api")

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)
