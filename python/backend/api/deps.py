"""API dependencies."""

from fastapi import Request

from backend.services import GameService


def get_game_service(request: Request) -> GameService:
    """The service wired into this application instance."""
    return request.app.state.service
