def test_index_and_health(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()

    res = client.get('/health')
    assert res.status_code == 200
    assert res.get_data(as_text=True) == 'OK'


def test_rooms_empty(client):
    res = client.get('/api/rooms')
    assert res.status_code == 200
    assert res.get_json() == []


def test_rooms_listing_and_state(client, make_sio_client):
    alice, bob = make_sio_client(), make_sio_client()
    alice.emit('join_game', 'alice', namespace='/ws')
    bob.emit('join_game', 'bob', namespace='/ws')

    rooms = client.get('/api/rooms').get_json()
    assert len(rooms) == 1
    summary = rooms[0]
    assert summary['playerCount'] == 2
    assert summary['capacity'] == 2
    assert isinstance(summary['startTime'], int)

    res = client.get(f"/api/rooms/{summary['id']}")
    assert res.status_code == 200
    state = res.get_json()
    assert state['text'] == 'the quick brown fox'
    assert sorted(p['username'] for p in state['players'].values()) == ['alice', 'bob']
    assert state['finishOrder'] == []


def test_room_not_found(client):
    res = client.get('/api/rooms/nope00')
    assert res.status_code == 404
    assert res.get_json() == {'error': 'Room not found'}


def test_default_config_draws_builtin_passage():
    from config import Config
    from typerace import create_app, registry
    from typerace.services.race.texts import DEFAULT_TEXT

    assert Config.RACE_TEXTS is None
    create_app(Config)
    assert registry.text_source.passages == [DEFAULT_TEXT]
    registry.reset()
