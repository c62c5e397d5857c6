import pytest

from wordpop.config.app_config import TestingConfig
from wordpop.services import game_service as game_service_module
from wordpop.services.game_service import GameService
from wordpop.services.word_loader import WordListLoader

from conftest import LOSING_GUESSES


def start_game(client, **body):
    response = client.post('/api/new_game', json=body)
    assert response.status_code == 200
    return response.get_json()['game_id']


def test_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    data = response.get_json()
    assert data['status'] == 'healthy'
    assert data['results_storage'] == 'MemoryResultsService'


def test_new_game(client):
    response = client.post('/api/new_game', json={'mode': 'random'})
    data = response.get_json()
    assert response.status_code == 200
    assert data['success']
    assert data['state']['answer'] is None
    assert data['state']['max_rounds'] == 6
    assert len(data['state']['letter_status']) == 26


def test_new_game_without_body_defaults_to_random(client):
    response = client.post('/api/new_game')
    assert response.status_code == 200
    assert response.get_json()['state']['mode'] == 'random'


def test_new_game_validation(client):
    assert client.post('/api/new_game', json={'mode': 'speedrun'}).status_code == 400
    assert client.post('/api/new_game', json={'timed': 'yes'}).status_code == 400
    assert client.post('/api/new_game', json={'blind': 1}).status_code == 400


def test_guess_flow(client, results):
    game_id = start_game(client)

    response = client.post(f'/api/game/{game_id}/guess', json={'guess': 'slate'})
    state = response.get_json()['state']
    assert response.status_code == 200
    assert state['guess_results'][0][2] == ['A', 'CORRECT']
    assert state['answer'] is None

    response = client.post(f'/api/game/{game_id}/guess', json={'guess': 'CRANE'})
    state = response.get_json()['state']
    assert state['won'] and state['game_over']
    assert state['answer'] == 'CRANE'
    assert state['score'] == 850
    assert results.get_stats().total_wins == 1


def test_guess_rejections(client):
    game_id = start_game(client)

    response = client.post(f'/api/game/{game_id}/guess', json={'guess': 'ZZZZZ'})
    assert response.status_code == 400
    assert response.get_json()['reason'] == 'NOT_IN_DICTIONARY'

    response = client.post(f'/api/game/{game_id}/guess', json={'guess': 'CRA'})
    assert response.status_code == 400
    assert response.get_json()['reason'] == 'WRONG_LENGTH'

    response = client.post(f'/api/game/{game_id}/guess', json={})
    assert response.status_code == 400

    state = client.get(f'/api/game/{game_id}/state').get_json()['state']
    assert state['current_round'] == 0


def test_guess_after_loss_is_game_over(client):
    game_id = start_game(client)
    for guess in LOSING_GUESSES:
        client.post(f'/api/game/{game_id}/guess', json={'guess': guess})

    response = client.post(f'/api/game/{game_id}/guess', json={'guess': 'CRANE'})
    assert response.status_code == 400
    assert response.get_json()['reason'] == 'GAME_OVER'


def test_unknown_game_is_404(client):
    assert client.get('/api/game/nope/state').status_code == 404
    assert client.post('/api/game/nope/guess', json={'guess': 'CRANE'}).status_code == 404
    assert client.post('/api/game/nope/time_up').status_code == 404
    assert client.post('/api/game/nope/reset').status_code == 404
    assert client.delete('/api/game/nope').status_code == 404


def test_time_up(client):
    game_id = start_game(client, timed=True)
    response = client.post(f'/api/game/{game_id}/time_up')
    state = response.get_json()['state']
    assert state['game_over'] and state['ended_by_time']
    assert state['answer'] == 'CRANE'


def test_reset_and_delete(client):
    game_id = start_game(client)
    client.post(f'/api/game/{game_id}/guess', json={'guess': 'CRANE'})

    state = client.post(f'/api/game/{game_id}/reset').get_json()['state']
    assert not state['game_over']
    assert state['guesses'] == []

    assert client.delete(f'/api/game/{game_id}').get_json()['success']
    assert client.delete(f'/api/game/{game_id}').status_code == 404


def test_blind_game_hides_feedback(client):
    game_id = start_game(client, blind=True)
    state = client.post(f'/api/game/{game_id}/guess', json={'guess': 'SLATE'}).get_json()['state']
    assert state['blind']
    assert state['guess_results'] == []


def test_word_endpoint(client):
    response = client.get('/api/word?mode=daily')
    assert response.status_code == 200
    assert response.get_json() == {'word': 'CRANE', 'mode': 'daily'}

    data = client.get('/api/word?mode=category&category=colors').get_json()
    assert data['category'] == 'colors'

    assert client.get('/api/word?mode=speedrun').status_code == 400


def test_validate_word(client):
    assert client.post('/api/word/validate', json={'word': 'crane'}).get_json() == {'isValid': True}
    assert client.post('/api/word/validate', json={'word': 'ZZZZZ'}).get_json() == {'isValid': False}
    assert client.post('/api/word/validate', json={}).status_code == 400


@pytest.mark.parametrize('word', ['ab', 'cranes', 'cr4ne', '\u00e9cole', ''])
def test_validate_word_rejects_malformed(client, word):
    response = client.post('/api/word/validate', json={'word': word})
    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_categories(client):
    categories = client.get('/api/word/categories').get_json()['categories']
    assert 'nature' in categories
    assert categories == sorted(categories)


def test_results_endpoints(client):
    body = {'word': 'crane', 'attempts': 2, 'timeElapsed': 15, 'points': 850, 'isWin': True}
    response = client.post('/api/results', json=body)
    assert response.status_code == 200
    saved = response.get_json()
    assert saved['word'] == 'CRANE'
    assert saved['id']

    invalid = client.post('/api/results', json={'word': 'CRANE'})
    assert invalid.status_code == 400
    assert invalid.get_json()['errors']

    recent = client.get('/api/results?limit=5').get_json()
    assert [result['id'] for result in recent] == [saved['id']]

    stats = client.get('/api/stats').get_json()
    assert stats['totalGames'] == 1
    assert stats['guessDistribution']['2'] == 1


def test_results_limit_falls_back_on_bad_value(client):
    assert client.get('/api/results?limit=abc').status_code == 200
    assert client.get('/api/results?limit=-3').status_code == 200


def test_service_unavailable(client, monkeypatch):
    monkeypatch.setattr(game_service_module, '_game_service', None)
    assert client.post('/api/new_game', json={}).status_code == 503
    assert client.get('/api/health').get_json()['status'] == 'degraded'


@pytest.fixture
def custom_words_client(app, tmp_path, clock, selector, results, monkeypatch):
    custom_config = type('CustomWordsConfig', (TestingConfig,), {
        'CUSTOM_WORDS_FILE': str(tmp_path / 'custom.txt')
    })
    word_loader = WordListLoader(custom_config, clock=clock)
    word_loader.load()
    service = GameService(word_loader, selector, results_service=results, config=custom_config, clock=clock)
    monkeypatch.setattr(game_service_module, '_game_service', service)
    return service


def test_custom_word_accepted_by_new_games(client, custom_words_client, tmp_path):
    assert client.post('/api/word/validate', json={'word': 'zorbs'}).get_json() == {'isValid': False}
    old_game = start_game(client)

    response = client.post('/api/word/custom', json={'word': 'zorbs'})
    assert response.status_code == 200
    assert response.get_json() == {'success': True, 'word': 'ZORBS', 'isValid': True}
    assert 'ZORBS' in (tmp_path / 'custom.txt').read_text(encoding='utf-8')

    assert client.post('/api/word/validate', json={'word': 'ZORBS'}).get_json() == {'isValid': True}
    new_game = start_game(client)
    assert client.post(f'/api/game/{new_game}/guess', json={'guess': 'zorbs'}).status_code == 200
    # Games started before the reload keep their corpus
    assert client.post(f'/api/game/{old_game}/guess', json={'guess': 'zorbs'}).status_code == 400


def test_custom_word_validation(client, custom_words_client):
    assert client.post('/api/word/custom', json={'word': 'ab'}).status_code == 400
    assert client.post('/api/word/custom', json={}).status_code == 400


def test_custom_word_without_file(client):
    response = client.post('/api/word/custom', json={'word': 'zorbs'})
    assert response.status_code == 503
    assert response.get_json()['success'] is False
