from wordpop.websocket.handlers import broadcast_game_over


def received_events(socket_client):
    return {event['name']: event['args'][0] for event in socket_client.get_received()}


def test_join_game_sends_state(socket_client, service):
    game_id = service.create_new_game()
    socket_client.emit('join_game', {'game_id': game_id})

    events = received_events(socket_client)
    assert events['game_state']['state']['game_id'] == game_id


def test_join_requires_game_id(socket_client):
    socket_client.emit('join_game', {})
    assert received_events(socket_client)['error']['error'] == 'Game ID is required'


def test_join_unknown_game(socket_client):
    socket_client.emit('join_game', {'game_id': 'missing'})
    assert received_events(socket_client)['error']['error'] == 'Game not found'


def test_rejected_guess_goes_to_sender(socket_client, service):
    game_id = service.create_new_game()
    socket_client.emit('submit_guess', {'game_id': game_id, 'guess': 'ZZZZZ'})

    events = received_events(socket_client)
    assert events['guess_rejected']['reason'] == 'NOT_IN_DICTIONARY'
    assert 'guess_result' not in events


def test_winning_guess_broadcasts_result_and_game_over(socket_client, service):
    game_id = service.create_new_game()
    socket_client.emit('join_game', {'game_id': game_id})
    socket_client.get_received()

    socket_client.emit('submit_guess', {'game_id': game_id, 'guess': 'crane'})
    events = received_events(socket_client)

    assert events['guess_result']['guess'] == 'CRANE'
    assert events['game_over']['won']
    assert events['game_over']['answer'] == 'CRANE'


def test_time_up_ends_timed_game(socket_client, service):
    game_id = service.create_new_game(timed=True)
    socket_client.emit('time_up', {'game_id': game_id})

    game_over = received_events(socket_client)['game_over']
    assert game_over['ended_by_time']
    assert not game_over['won']


def test_time_up_on_untimed_game_returns_state(socket_client, service):
    game_id = service.create_new_game(timed=False)
    socket_client.emit('time_up', {'game_id': game_id})

    events = received_events(socket_client)
    assert 'game_over' not in events
    assert not events['game_state']['state']['game_over']


def test_worker_broadcast_reaches_room(app_and_socketio, socket_client, service, clock):
    _, socketio = app_and_socketio
    game_id = service.create_new_game(timed=True)
    socket_client.emit('join_game', {'game_id': game_id})
    socket_client.get_received()

    clock.advance(1000)
    for expired_id in service.expire_timed_games():
        broadcast_game_over(socketio, service, expired_id)

    game_over = received_events(socket_client)['game_over']
    assert game_over['game_id'] == game_id
    assert game_over['ended_by_time']
