"""
Game Controller

Handles all daily-game HTTP endpoints.
"""

from dataclasses import asdict
from flask import Blueprint, request, jsonify
from ..services.evaluator import GuessRejectedError
from ..services.game_engine import build_view
from ..services.game_service import get_game_service
from ..utils.decorators import require_game_service
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _error_response(action: str, error: Exception, status: int = 500):
    game_logger.log_error(request, error, action)
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response)
    return jsonify(error_response), status


def _rejection_response(action: str, error: GuessRejectedError):
    error_response = {
        'success': False,
        'error': error.message,
        'reason': error.reason.value
    }
    game_logger.log_server_response(
        request, action, False, error_response,
        validation_error=error.reason.value, attempted_guess=error.guess
    )
    return jsonify(error_response), 400


def _state_response(action: str, state, **log_details):
    response_data = {
        'success': True,
        'state': asdict(build_view(state))
    }
    game_logger.log_server_response(request, action, True, response_data, **log_details)
    return jsonify(response_data)


@game_bp.route('/daily', methods=['GET'])
@require_game_service
def get_daily(game_service, player_id):
    """Get today's game for the current player."""
    try:
        game_logger.log_user_action(request, 'get_state')
        state = game_service.get_state(player_id)
        return _state_response('get_state', state, guesses=len(state.guesses))
    except Exception as e:
        return _error_response('get_state', e)


@game_bp.route('/daily/guess', methods=['POST'])
@require_game_service
def make_guess(game_service, player_id):
    """Submit a full code for validation and evaluation."""
    try:
        data = request.get_json(silent=True) or {}
        guess = data.get('guess')
        if not isinstance(guess, str):
            error_response = {
                'success': False,
                'error': 'Guess is required'
            }
            game_logger.log_server_response(request, 'submit_guess', False, error_response)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'submit_guess', guess=guess, guess_length=len(guess))

        try:
            state = game_service.submit_guess(player_id, guess)
        except GuessRejectedError as e:
            return _rejection_response('submit_guess', e)

        return _state_response(
            'submit_guess', state,
            guess=guess, round=len(state.guesses), game_over=state.game_over
        )
    except Exception as e:
        return _error_response('submit_guess', e)


@game_bp.route('/daily/key', methods=['POST'])
@require_game_service
def press_key(game_service, player_id):
    """Apply one on-screen keyboard press (a letter, ENTER or BACKSPACE)."""
    try:
        data = request.get_json(silent=True) or {}
        key = data.get('key')
        if not isinstance(key, str) or not key:
            error_response = {
                'success': False,
                'error': 'Key is required'
            }
            game_logger.log_server_response(request, 'press_key', False, error_response)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'press_key', key=key)

        try:
            state = game_service.press_key(player_id, key)
        except GuessRejectedError as e:
            return _rejection_response('press_key', e)

        return _state_response('press_key', state, key=key)
    except Exception as e:
        return _error_response('press_key', e)


@game_bp.route('/daily/input', methods=['PUT'])
@require_game_service
def set_input(game_service, player_id):
    """Replace the input buffer from a raw text field."""
    try:
        data = request.get_json(silent=True) or {}
        text = data.get('text', '')
        if not isinstance(text, str):
            return jsonify({'success': False, 'error': 'Text must be a string'}), 400

        game_logger.log_user_action(request, 'set_input', text=text)
        state = game_service.set_input(player_id, text)
        return _state_response('set_input', state)
    except Exception as e:
        return _error_response('set_input', e)


@game_bp.route('/countdown', methods=['GET'])
def countdown():
    """Time left until the next daily code."""
    game_service = get_game_service()
    if not game_service:
        return jsonify({
            'success': False,
            'error': 'Game service unavailable'
        }), 500

    return jsonify({
        'success': True,
        'day': game_service.current_day(),
        'countdown': game_service.countdown()
    })


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy' if game_service else 'degraded',
            'day': game_service.current_day() if game_service else None,
            'catalog': game_service.get_catalog_statistics() if game_service else None,
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
