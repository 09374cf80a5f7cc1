"""Puzzle, scoring and hint API routes."""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from backend.api.schemas import (
    BoardRequest,
    CheckResponse,
    EndGameRequest,
    EndGameResponse,
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    HintResponse,
    PlayerResponse,
    PlayerStatsSchema,
    SessionSchema,
    TierSchema,
)
from backend.api.deps import get_game_service
from backend.services import GameService

router = APIRouter(
    prefix="/api",
    tags=["puzzle"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)


@router.post("/puzzle/generate", response_model=GenerateResponse)
def generate_puzzle(
    request: GenerateRequest,
    service: GameService = Depends(get_game_service),
) -> GenerateResponse:
    """Hand the player a puzzle sized to their skill and open a session."""
    assignment = service.start_session(request.player_id)
    return GenerateResponse(
        session_id=assignment.session_id,
        puzzle_id=assignment.puzzle_id,
        size=assignment.size,
        difficulty=assignment.difficulty,
        board=assignment.cells,
        requested=TierSchema(
            size=assignment.requested.size,
            difficulty=assignment.requested.difficulty,
        ),
        fallback=assignment.fallback,
        skill=assignment.skill,
    )


@router.post("/game/end", response_model=EndGameResponse)
def end_game(
    request: EndGameRequest,
    service: GameService = Depends(get_game_service),
) -> EndGameResponse:
    """Close a session and update the player's skill."""
    outcome = service.finish_session(
        request.session_id, request.moves, request.time, request.status
    )
    return EndGameResponse(
        session_id=outcome.session.session_id,
        status=outcome.session.status,
        old_skill=outcome.skill.old_skill,
        new_skill=outcome.skill.new_skill,
        adjustment=outcome.skill.adjustment,
    )


@router.post("/magic/hint", response_model=HintResponse)
def hint(
    request: BoardRequest,
    service: GameService = Depends(get_game_service),
) -> HintResponse:
    """Suggest the next tile to slide for a live board."""
    tile = service.hint(request.board, request.size, request.session_id)
    return HintResponse(next_tile=tile)


@router.post("/puzzle/check", response_model=CheckResponse)
def check_board(
    request: BoardRequest,
    service: GameService = Depends(get_game_service),
) -> CheckResponse:
    """Report whether a board is solvable and whether it is solved."""
    result = service.check(request.board, request.size)
    return CheckResponse(solvable=result.solvable, solved=result.solved)


@router.get("/players/{player_id}", response_model=PlayerResponse)
def player_profile(
    player_id: str,
    service: GameService = Depends(get_game_service),
) -> PlayerResponse:
    """Skill, current tier and session history of a player."""
    summary = service.profile(player_id)
    return PlayerResponse(
        player_id=summary.player_id,
        skill=summary.skill,
        tier=TierSchema(size=summary.tier.size, difficulty=summary.tier.difficulty),
        stats=PlayerStatsSchema(**asdict(summary.stats)),
        sessions=[
            SessionSchema(**{k: v for k, v in s.to_dict().items() if k != "player_id"})
            for s in summary.sessions
        ],
    )
