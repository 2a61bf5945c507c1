def create(client):
    res = client.post('/api/games/create')
    assert res.status_code == 201
    return res.get_json()


def place(client, code, kind, item_id, person):
    return client.post(f'/api/games/{code}/place', json={'item': {'kind': kind, 'id': item_id}, 'person': person})


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_catalog_endpoints(client):
    people = client.get('/api/people').get_json()['people']
    assert [p['name'] for p in people] == ['Ann', 'Bo', 'Cy']
    facts = client.get('/api/facts').get_json()['facts']
    assert facts[0] == {'id': 1, 'name': 'Ann', 'fact': 'likes tea'}
    pets = client.get('/api/pets').get_json()['pets']
    assert pets[1] == {'id': 2, 'owner': 'Cy', 'name': 'Tom', 'image': '/pets/tom.jpg'}


def test_create_game(client):
    game = create(client)
    assert len(game['game_code']) == 4
    assert game['score'] == 0
    assert game['pets_unlocked'] is False
    assert game['status'] == 'Match the fun facts to unlock pets, then press Submit.'
    assert len(game['board']['unplaced_facts']) == 2


def test_full_round_flow(client):
    code = create(client)['game_code']

    res = place(client, code, 'fact', 1, 'Ann')
    assert res.status_code == 200
    assert res.get_json()['applied'] is True
    assert place(client, code, 'fact', 2, 'Bo').get_json()['applied'] is True

    res = client.post(f'/api/games/{code}/submit')
    assert res.status_code == 200
    data = res.get_json()
    assert data['result']['corrected_count'] == 2
    assert data['result']['tier_unlocked'] is True
    assert data['narration'] == {'kind': 'tier_unlocked', 'text': 'Congrats! Hard mode unlocked!'}
    assert data['score'] == 128
    assert data['pets_unlocked'] is True

    state = client.get(f'/api/games/{code}/state').get_json()
    assert state['score'] == 128
    assert state['status'] == 'Congrats! Hard mode unlocked!'
    assert len(state['round_history']) == 1
    ann = next(p for p in state['board']['people'] if p['name'] == 'Ann')
    assert ann['items'][0]['locked'] is True


def test_wrong_guess_then_retry(client):
    code = create(client)['game_code'].lower()
    place(client, code, 'fact', 1, 'Bo')
    data = client.post(f'/api/games/{code}/submit').get_json()
    assert data['narration']['kind'] == 'no_correct'
    assert data['score'] == 0

    place(client, code, 'fact', 1, 'Ann')
    data = client.post(f'/api/games/{code}/submit').get_json()
    assert data['score'] == 32
    assert data['result']['outcomes'][0]['attempt'] == 2


def test_ignored_operations_are_not_errors(client):
    code = create(client)['game_code']
    res = place(client, code, 'pet', 1, 'Ann')
    assert res.status_code == 200
    assert res.get_json()['applied'] is False
    res = place(client, code, 'fact', 1, 'Nobody')
    assert res.get_json()['applied'] is False
    res = client.post(f'/api/games/{code}/unplace', json={'item': {'kind': 'fact', 'id': 1}})
    assert res.get_json()['applied'] is False


def test_placement_clears_status(client):
    code = create(client)['game_code']
    client.post(f'/api/games/{code}/submit')
    assert client.get(f'/api/games/{code}/state').get_json()['status'].startswith('Nothing to check')
    place(client, code, 'fact', 1, 'Ann')
    assert client.get(f'/api/games/{code}/state').get_json()['status'] == ''


def test_unplace_returns_card_to_pool(client):
    code = create(client)['game_code']
    place(client, code, 'fact', 2, 'Cy')
    res = client.post(f'/api/games/{code}/unplace', json={'item': {'kind': 'fact', 'id': 2}})
    data = res.get_json()
    assert data['applied'] is True
    assert len(data['board']['unplaced_facts']) == 2


def test_malformed_item_is_bad_request(client):
    code = create(client)['game_code']
    assert place(client, code, 'dog', 1, 'Ann').status_code == 400
    assert place(client, code, 'fact', 'one', 'Ann').status_code == 400
    res = client.post(f'/api/games/{code}/place', json={'item': {'kind': 'fact', 'id': 1}})
    assert res.status_code == 400


def test_non_object_body_is_bad_request(client):
    code = create(client)['game_code']
    for body in ([1], [1, 2], 'fact', 7):
        res = client.post(f'/api/games/{code}/place', json=body)
        assert res.status_code == 400
        assert 'error' in res.get_json()
        res = client.post(f'/api/games/{code}/unplace', json=body)
        assert res.status_code == 400


def test_unknown_game_is_404(client):
    assert client.get('/api/games/ZZZZ/state').status_code == 404
    assert client.post('/api/games/ZZZZ/submit').status_code == 404


def test_unknown_codes_leave_no_locks_behind(client):
    from funfacts.api.games import _game_locks
    before = len(_game_locks)
    for i in range(50):
        code = f'Q{i:03d}'
        assert client.post(f'/api/games/{code}/submit').status_code == 404
        assert client.post(f'/api/games/{code}/reset').status_code == 404
        assert place(client, code, 'fact', 1, 'Ann').status_code == 404
        res = client.post(f'/api/games/{code}/unplace', json={'item': {'kind': 'fact', 'id': 1}})
        assert res.status_code == 404
    assert len(_game_locks) == before


def test_locks_are_released_after_requests(client):
    from funfacts.api.games import _game_locks
    code = create(client)['game_code']
    place(client, code, 'fact', 1, 'Ann')
    client.post(f'/api/games/{code}/submit')
    assert code not in _game_locks


def test_reset(client):
    code = create(client)['game_code']
    place(client, code, 'fact', 1, 'Ann')
    client.post(f'/api/games/{code}/submit')
    data = client.post(f'/api/games/{code}/reset').get_json()
    assert data['score'] == 0
    assert data['rounds_played'] == 0
    assert len(data['board']['unplaced_facts']) == 2


def test_load_failure_creates_nothing(flask_app, client, failing_source):
    from funfacts.models import GameSession
    flask_app.config['CATALOG_SOURCE'] = failing_source
    res = client.post('/api/games/create')
    assert res.status_code == 503
    assert res.get_json()['error'] == 'Failed to load data. Check server.'
    assert GameSession.query.count() == 0
    assert client.get('/api/facts').status_code == 500


def test_directory_catalog(flask_app, client, tmp_path):
    people = tmp_path / 'people'
    people.mkdir()
    (people / 'ann.jpg').write_bytes(b'\xff\xd8fake')
    (tmp_path / 'fun-facts.csv').write_text('Name,Fact\nAnn,likes tea\n', encoding='utf-8')
    flask_app.config.update(
        CATALOG_SOURCE=None,
        PEOPLE_DIR=str(people),
        FACTS_CSV=str(tmp_path / 'fun-facts.csv'),
        PETS_CSV=str(tmp_path / 'pets.csv'),
    )
    assert client.get('/api/facts').get_json()['facts'] == [{'id': 1, 'name': 'Ann', 'fact': 'likes tea'}]
    assert client.get('/api/people').get_json()['people'] == [{'name': 'Ann', 'image': '/people/ann.jpg'}]
    res = client.get('/people/ann.jpg')
    assert res.status_code == 200
    assert res.data == b'\xff\xd8fake'
    assert client.get('/people/missing.jpg').status_code == 404
    assert client.get('/people/notes.txt').status_code == 404
