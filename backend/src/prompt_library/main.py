import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings, assert_secure_configuration
from .core.logging import configure_logging
from .core.database import init_database
from .api.routes.v1.health import router as health_router
from .api.routes.v1.prompts import router as prompts_router


configure_logging(settings.log_level)
log = logging.getLogger("promptlib.main")


def create_app(*, with_ui: bool | None = None) -> FastAPI:
    app = FastAPI(title="Prompt Library API", version="0.1.0")

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers v1
    app.include_router(health_router, prefix=f"{settings.api_prefix}/v1", tags=["health"])
    app.include_router(prompts_router, prefix=f"{settings.api_prefix}/v1", tags=["prompts"])

    @app.on_event("startup")
    def _startup() -> None:
        assert_secure_configuration()
        init_database()

    if settings.ui_enabled if with_ui is None else with_ui:
        # NiceGUI registers global pages on import; only load it when serving the grid
        from .ui.prompts_page import mount_prompt_grid

        mount_prompt_grid(app)

    return app


app = create_app()
