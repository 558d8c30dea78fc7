def _create(client, **body):
    body.setdefault('hostName', 'Ana')
    return client.post('/api/rooms', json=body)


def test_create_room(client):
    res = _create(client)
    assert res.status_code == 201
    data = res.get_json()
    assert 'roomId' in data
    room = data['room']
    assert room['id'] == data['roomId']
    assert room['hostName'] == 'Ana'
    assert room['cardSize'] == 24
    assert room['drawnNumbers'] == []
    assert room['participants'] == {}


def test_create_room_accepts_card_size_aliases(client):
    assert _create(client, cardSize=20).get_json()['room']['cardSize'] == 20
    assert _create(client, numbersPerCard=15).get_json()['room']['cardSize'] == 15


def test_create_room_requires_host_name(client):
    res = client.post('/api/rooms', json={})
    assert res.status_code == 400
    assert 'error' in res.get_json()
    assert client.post('/api/rooms', json={'hostName': 'Ana', 'cardSize': 99}).status_code == 400


def test_get_room(client):
    room_id = _create(client).get_json()['roomId']
    res = client.get(f'/api/rooms/{room_id}')
    assert res.status_code == 200
    assert res.get_json()['id'] == room_id
    res = client.get('/api/rooms/does-not-exist')
    assert res.status_code == 404
    assert res.get_json()['error']


def test_join_and_state(client):
    room_id = _create(client).get_json()['roomId']
    res = client.post(f'/api/rooms/{room_id}/join', json={'participantName': 'Bruno'})
    assert res.status_code == 201
    data = res.get_json()
    pid = data['participantId']
    assert data['userId'] == pid
    participant = data['participant']
    assert participant['name'] == 'Bruno'
    assert len(participant['card']) == 24
    assert len(set(participant['card'])) == 24
    assert participant['markedNumbers'] == []
    assert (participant['rows'], participant['cols']) == (5, 5)
    assert participant['cardGrid'][participant['centerRow'] * 5 + participant['centerCol']] is None

    room = client.get(f'/api/rooms/{room_id}').get_json()
    assert pid in room['participants']
    assert room['participantCount'] == 1


def test_join_errors(client):
    room_id = _create(client).get_json()['roomId']
    assert client.post(f'/api/rooms/{room_id}/join', json={}).status_code == 400
    assert client.post('/api/rooms/nope/join', json={'participantName': 'Bruno'}).status_code == 404


def test_unknown_api_route_is_json_404(client):
    res = client.get('/api/nothing-here')
    assert res.status_code == 404
    assert res.get_json() == {'error': 'Route not found'}


def test_health(client):
    _create(client)
    data = client.get('/health').get_json()
    assert data == {'status': 'ok', 'rooms': 1}


def test_card_preview_command(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['card-preview', '--size', '24'])
    assert result.exit_code == 0
    assert 'FREE' in result.output
    assert '24 numbers' in result.output

    result = runner.invoke(args=['card-preview', '--size', '0'])
    assert result.exit_code != 0


def test_room_sweeper_stays_off_in_tests(flask_app):
    from bingo.services import get_services
    from bingo.services.sweeper import start_room_sweeper
    flask_app.config['ROOM_TTL_SEC'] = 30
    assert start_room_sweeper(flask_app, get_services()) is False
