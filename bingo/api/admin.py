from flask import Blueprint, jsonify, current_app

from bingo.hub import GameHub
from bingo.models import HIGHEST_NUMBER, LOWEST_NUMBER


admin = Blueprint('admin', __name__)


def _hub() -> GameHub:
    return current_app.extensions['bingo_hub']


@admin.route('/users', methods=['GET'])
def connected_users():
    return jsonify([u.to_dict() for u in _hub().get_connected_users()])


@admin.route('/users/<string:connection_id>/ticket', methods=['GET'])
def user_ticket(connection_id):
    ticket = _hub().get_user_ticket(connection_id)
    return jsonify({
        'connectionId': connection_id,
        'ticket': ticket.to_dict() if ticket else None,
    })


@admin.route('/users/<string:connection_id>/ticket', methods=['POST'])
def send_ticket(connection_id):
    ticket = _hub().generate_and_send_ticket(None, connection_id)
    if ticket is None:
        return jsonify({'error': 'Failed to generate a valid ticket after several attempts.'}), 503
    return jsonify({'connectionId': connection_id, 'ticket': ticket.to_dict()}), 201


@admin.route('/called-numbers', methods=['GET'])
def called_numbers():
    hub = _hub()
    numbers = hub.get_called_numbers()
    return jsonify({
        'numbers': numbers,
        'state': hub.state.value,
        'remaining': HIGHEST_NUMBER - LOWEST_NUMBER + 1 - len(numbers),
    })


@admin.route('/call-number', methods=['POST'])
def call_number():
    number = _hub().call_number()
    if number is None:
        return jsonify({'error': 'All numbers have been called'}), 409
    return jsonify({'number': number})


@admin.route('/new-game', methods=['POST'])
def new_game():
    _hub().new_game()
    return jsonify({'message': 'New game started'})


@admin.route('/reset-called-numbers', methods=['POST'])
def reset_called_numbers():
    _hub().reset_called_numbers()
    return jsonify({'message': 'Called numbers reset'})
