"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from contextlib import AbstractContextManager
from dataclasses import replace
from typing import Optional, Protocol
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveEvent,
    MoveRequest,
    MoveResponse,
    PreviewResponse,
)
from src.core.exceptions import GameStateError, PlacementError, RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Color, Status
from src.db.repository import GameRepository
from src.reversi.game import Game
from src.reversi.pieces import Piece
from src.reversi.square import Square
from src.services.registry import GameRegistry

logger = logging.getLogger(__name__)


class MoveListener(Protocol):
    """Whatever pushes moves to the players and spectators of a game (websocket broadcast, message queue, ...)"""

    def publish(self, event: MoveEvent) -> None: ...


class ReversiService:
    """Orchestration of layers for Reversi game."""

    def __init__(
        self,
        repository: GameRepository,
        registry: Optional[GameRegistry] = None,
        listener: Optional[MoveListener] = None,
    ) -> None:
        self.repo = repository
        self.registry = registry if registry is not None else GameRegistry()
        self.listener = listener

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game."""

        new_game = Game.new_game()
        created_game_data = new_game.to_model(
            registered_players={request.color.value: request.player_name},
            status=Status.WAITING_FOR_PLAYERS,
        )

        stored_game, game_id = self.repo.create_game(created_game_data)
        logger.info(
            "Game %s created by %s playing %s",
            game_id,
            request.player_name,
            request.color.value,
        )
        return self._create_game_response(game_id, stored_game)

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game. They get the color the first player did not pick."""

        stored_model = self._fetch_game(request.game_id)
        if stored_model.status != Status.WAITING_FOR_PLAYERS:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {stored_model.status}"
            )
        if request.player_name in stored_model.registered_players.values():
            raise GameStateError(
                f"Player {request.player_name!r} is already registered in this game."
            )

        opponent_color = Color(next(iter(stored_model.registered_players)))
        player_color = Color.WHITE if opponent_color == Color.BLACK else Color.BLACK
        with_player_registered = replace(
            stored_model,
            registered_players={
                **stored_model.registered_players,
                player_color.value: request.player_name,
            },
            status=Status.IN_PROGRESS,
        )

        self._store(request.game_id, with_player_registered)
        logger.info(
            "Player %s joined game %s as %s",
            request.player_name,
            request.game_id,
            player_color.value,
        )
        return self._create_game_response(request.game_id, with_player_registered)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Squares to highlight for the player. Empty when it is not their turn."""

        stored_model = self._fetch_game(request.game_id)
        self._assert_in_progress(stored_model)
        color = self._get_player_color(stored_model, request.player_name)

        with self._live_game(request.game_id) as game:
            moves = game.moves(Piece(color.value))

        return LegalMovesResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            color=color,
            legal_moves=[square.to_notation() for square in moves],
        )

    def preview_move(self, request: MoveRequest) -> PreviewResponse:
        """Show the consequences of a move before committing to it."""

        stored_model = self._fetch_game(request.game_id)
        self._assert_in_progress(stored_model)
        color = self._get_player_color(stored_model, request.player_name)
        square = Square.from_notation(request.square)

        with self._live_game(request.game_id) as game:
            flips = game.preview(square.x, square.y, Piece(color.value))

        return PreviewResponse(
            game_id=request.game_id,
            square=request.square,
            flips=[flipped.to_notation() for flipped in flips],
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----

        The whole read-place-store-notify sequence runs under the game's lock,
        so two requests for the same game can never interleave.
        """
        square = Square.from_notation(request.square)

        with self._live_game(request.game_id) as game:
            stored_model = self._fetch_game(request.game_id)
            self._assert_in_progress(stored_model)
            color = self._get_player_color(stored_model, request.player_name)
            piece = Piece(color.value)

            try:
                flips = game.place(square.x, square.y, piece)
            except PlacementError as e:
                logger.debug(
                    "Rejected move %s by %s in game %s: %s",
                    request.square,
                    request.player_name,
                    request.game_id,
                    e,
                )
                raise

            status = Status.FINISHED if game.over() else Status.IN_PROGRESS
            after_move = game.to_model(
                registered_players=stored_model.registered_players, status=status
            )
            try:
                self._store(request.game_id, after_move)
            except Exception:
                # the cached game is ahead of the stored one now: reload it next time
                self.registry.discard(request.game_id)
                raise

            flipped = [s.to_notation() for s in flips]
            logger.info(
                "%s played %s in game %s, capturing %d disc(s)",
                color.value,
                request.square,
                request.game_id,
                len(flips),
            )
            if status == Status.FINISHED:
                logger.info(
                    "Game %s finished with score %s", request.game_id, game.score()
                )

            if self.listener is not None:
                self.listener.publish(
                    MoveEvent(
                        game_id=request.game_id,
                        color=color,
                        square=request.square,
                        flips=flipped,
                    )
                )

        game_response = self._create_game_response(request.game_id, after_move)
        return MoveResponse(
            **game_response.model_dump(), placed=request.square, flips=flipped
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)
        self.registry.evict(request.game_id)
        logger.info("Game %s deleted", request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = Game.from_model(model)
        black, white = game.score()
        winner = game.winner() if model.status == Status.FINISHED else None
        return GameResponse(
            game_id=game_id,
            players=model.registered_players,
            board=model.board,
            turn=Color(model.turn),
            move_history=model.history,
            score={Color.BLACK: black, Color.WHITE: white},
            status=Status(model.status),
            winner=model.registered_players.get(winner.value) if winner else None,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

    def _store(self, game_id: UUID, model: GameModel) -> None:
        if self.repo.update_game(game_id, model) is None:
            raise RepositoryError(f"Game with {game_id=} not found.")

    def _live_game(self, game_id: UUID) -> AbstractContextManager[Game]:
        """Exclusive access to the in-memory Game, restored from the repository on first use."""
        return self.registry.acquire(
            game_id, lambda: Game.from_model(self._fetch_game(game_id))
        )

    def _assert_in_progress(self, model: GameModel) -> None:
        if model.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {model.status}")

    def _get_player_color(self, model: GameModel, player: str) -> Color:
        color = next(
            (c for c, name in model.registered_players.items() if name == player),
            None,
        )
        if color is None:
            raise GameStateError(f"Player {player!r} is not registered in this game.")
        return Color(color)
