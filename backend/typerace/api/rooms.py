from flask import Blueprint, jsonify
from typerace import registry
from typerace.services.race import UnknownRoom

rooms = Blueprint('rooms', __name__)


@rooms.route('', methods=['GET'])
def list_rooms():
    """Summaries of every live room, in creation order."""
    return jsonify([room.summary() for room in registry.list_rooms()])


@rooms.route('/<string:room_id>', methods=['GET'])
def get_room_state(room_id):
    try:
        room = registry.get_room(room_id)
    except UnknownRoom:
        return jsonify({'error': 'Room not found'}), 404
    return jsonify(room.to_dict())
