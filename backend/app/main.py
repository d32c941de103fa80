from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from routes.game import router as game_router
from routes.game_ws import create_router as create_game_ws_router
from services.checkers_session import CheckersSession


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="Checkers Relay API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # One fixed room per process.
    app.state.settings = settings
    app.state.checkers_session = CheckersSession(mandatory_jump=settings.mandatory_jump)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(game_router, prefix="/api")
    app.include_router(create_game_ws_router(settings.ws_path))
    return app


app = create_app()
