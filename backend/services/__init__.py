from .checkers_session import CheckersSession, Connection
from .relay import PlayerConnection, serve_player

__all__ = ["CheckersSession", "Connection", "PlayerConnection", "serve_player"]
