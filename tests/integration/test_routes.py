"""
Integration Tests for Routes

Tests the Flask blueprints and route handlers to ensure proper HTTP
responses and JSON bodies.
"""

import json
from io import BytesIO


class TestMainRoutes:
    """Test main blueprint routes."""

    def test_index_loads(self, client):
        """Test: Index returns 200 OK."""
        response = client.get('/')
        assert response.status_code == 200

    def test_index_lists_endpoints(self, client):
        """Test: Index links to the squad API."""
        data = client.get('/').get_json()

        assert data['endpoints']['analyze'] == '/api/squad/analyze'
        assert data['endpoints']['import'] == '/api/squad/import'
        assert data['endpoints']['sample_csv'] == '/api/squad/sample-csv'
        assert data['endpoints']['players'] == '/api/squad/players'

    def test_health(self, client):
        """Test: Health check reports ok."""
        response = client.get('/health')

        assert response.status_code == 200
        assert response.get_json() == {'status': 'ok'}

    def test_404_is_json(self, client):
        """Test: Non-existent route returns a JSON 404."""
        response = client.get('/nonexistent-page')

        assert response.status_code == 404
        assert response.get_json() == {'errors': ['Not found']}


class TestFormationsRoute:
    """Test the formations endpoint."""

    def test_formations(self, client):
        """Test: Formations and default are listed."""
        data = client.get('/api/squad/formations').get_json()

        assert '4-4-2' in data['formations']
        assert data['default'] == '3-4-3'


class TestAnalyzeRoute:
    """Test the analyze endpoint."""

    def test_analyze_valid_squad(self, client, squad_payload):
        """Test: Complete squad returns an analysis."""
        response = client.post('/api/squad/analyze', json=squad_payload)
        data = response.get_json()

        assert response.status_code == 200
        assert data['overall_grade'] == 'A'
        assert data['team']['name'] == 'Test FC'
        assert [s['id'] for s in data['suggestions']] == ['budget-optimization']
        assert data['summary'].startswith('Your Test FC team')

    def test_analyze_keeps_field_order(self, client, squad_payload):
        """Test: Response fields are not sorted alphabetically."""
        response = client.post('/api/squad/analyze', json=squad_payload)

        assert list(json.loads(response.get_data(as_text=True))) == [
            'team', 'suggestions', 'overall_grade', 'strengths', 'weaknesses', 'summary'
        ]

    def test_analyze_rejects_nan(self, client, squad_payload):
        """Test: Non-finite numbers return 400 instead of an invalid analysis."""
        squad_payload['starting'][0]['projected_points'] = float('nan')
        response = client.post(
            '/api/squad/analyze',
            data=json.dumps(squad_payload),
            content_type='application/json'
        )

        assert response.status_code == 400
        errors = json.loads(response.get_data(as_text=True))['errors']
        assert errors[0].startswith('starting.0.projected_points:')

    def test_analyze_rejects_infinity(self, client, squad_payload):
        """Test: Infinite prices are rejected."""
        body = json.dumps(squad_payload).replace('"price": 5.5', '"price": Infinity', 1)
        response = client.post('/api/squad/analyze', data=body, content_type='application/json')

        assert response.status_code == 400
        assert response.get_json()['errors'][0].startswith('starting.0.price:')

    def test_analyze_accepts_position_synonyms(self, client, squad_payload):
        """Test: Long position names are normalized."""
        squad_payload['starting'][0]['position'] = 'Goalkeeper'
        response = client.post('/api/squad/analyze', json=squad_payload)

        assert response.status_code == 200
        assert response.get_json()['team']['starting'][0]['position'] == 'GK'

    def test_analyze_incomplete_lineup(self, client, squad_payload):
        """Test: Ten starters returns 400 with the lineup error."""
        squad_payload['starting'] = squad_payload['starting'][:10]
        response = client.post('/api/squad/analyze', json=squad_payload)

        assert response.status_code == 400
        assert response.get_json()['errors'] == [
            'Please select exactly 11 players for your starting lineup'
        ]

    def test_analyze_non_json(self, client):
        """Test: Non-JSON body returns 400."""
        response = client.post('/api/squad/analyze', data='not json', content_type='text/plain')

        assert response.status_code == 400
        assert response.get_json()['errors'] == ['Request body must be a JSON object']

    def test_analyze_invalid_player(self, client, squad_payload):
        """Test: Invalid player field returns 400 with its path."""
        squad_payload['starting'][3]['price'] = -2
        response = client.post('/api/squad/analyze', json=squad_payload)

        assert response.status_code == 400
        assert response.get_json()['errors'][0].startswith('starting.3.price:')


class TestLineupRoutes:
    """Test lineup editing endpoints."""

    def test_add_player_to_bench(self, client, squad_payload, make_player):
        """Test: Extra goalkeeper goes to the bench."""
        payload = {
            'formation': '3-4-3',
            'starting': squad_payload['starting'],
            'bench': [],
            'player': make_player('GK', id='gk2', name='Ederson', team='MCI').to_dict(),
        }
        response = client.post('/api/squad/lineup/add', json=payload)
        data = response.get_json()

        assert response.status_code == 200
        assert len(data['starting']) == 11
        assert [p['id'] for p in data['bench']] == ['gk2']

    def test_add_player_to_full_squad(self, client, squad_payload, make_player):
        """Test: Sixteenth player returns 400."""
        payload = {
            'starting': squad_payload['starting'],
            'bench': [make_player('MID', id=f'b{i}').to_dict() for i in range(4)],
            'player': make_player('FWD', id='extra').to_dict(),
        }
        response = client.post('/api/squad/lineup/add', json=payload)

        assert response.status_code == 400
        assert response.get_json()['errors'] == ['You can only have 15 players in your squad']

    def test_move_player(self, client, squad_payload):
        """Test: Starter is moved to the bench."""
        player_id = squad_payload['starting'][0]['id']
        payload = {
            'starting': squad_payload['starting'],
            'bench': [],
            'player_id': player_id,
            'from_starting': True,
        }
        data = client.post('/api/squad/lineup/move', json=payload).get_json()

        assert len(data['starting']) == 10
        assert [p['id'] for p in data['bench']] == [player_id]

    def test_move_unknown_player(self, client, squad_payload):
        """Test: Unknown player id returns 400."""
        payload = {'starting': squad_payload['starting'], 'player_id': 'nobody'}
        response = client.post('/api/squad/lineup/move', json=payload)

        assert response.status_code == 400
        assert response.get_json()['errors'] == ['Player nobody is not in the starting lineup']


class TestImportRoute:
    """Test the CSV import endpoint."""

    def test_import_json(self, client, sample_csv):
        """Test: JSON content is parsed and arranged."""
        response = client.post('/api/squad/import', json={'content': sample_csv, 'team_name': 'Sample XI'})
        data = response.get_json()

        assert response.status_code == 200
        assert len(data['players']) == 9
        assert data['errors'] == ['Team needs at least 11 players']
        assert data['squad']['name'] == 'Sample XI'
        assert len(data['squad']['starting']) == 9

    def test_import_upload(self, client, sample_csv):
        """Test: Uploaded CSV file is parsed."""
        response = client.post(
            '/api/squad/import',
            data={
                'csv_file': (BytesIO(sample_csv.encode('utf-8')), 'squad.csv'),
                'team_name': 'Uploaded XI',
                'formation': '5-4-1',
            },
            content_type='multipart/form-data'
        )
        data = response.get_json()

        assert response.status_code == 200
        assert data['squad']['name'] == 'Uploaded XI'
        assert data['squad']['formation'] == '5-4-1'
        assert [p['name'] for p in data['squad']['bench']] == ['Harry Kane']

    def test_import_upload_default_team_name(self, client, sample_csv):
        """Test: Blank team name falls back to the default."""
        response = client.post(
            '/api/squad/import',
            data={'csv_file': (BytesIO(sample_csv.encode('utf-8')), 'squad.txt')},
            content_type='multipart/form-data'
        )

        assert response.status_code == 200
        assert response.get_json()['squad']['name'] == 'Imported Team'

    def test_import_wrong_file_type(self, client):
        """Test: Spreadsheet upload is rejected."""
        response = client.post(
            '/api/squad/import',
            data={'csv_file': (BytesIO(b'data'), 'squad.xlsx')},
            content_type='multipart/form-data'
        )

        assert response.status_code == 400
        assert response.get_json()['errors'][0].startswith('Invalid file type')

    def test_import_empty_file(self, client):
        """Test: Empty upload is rejected."""
        response = client.post(
            '/api/squad/import',
            data={'csv_file': (BytesIO(b''), 'squad.csv')},
            content_type='multipart/form-data'
        )

        assert response.status_code == 400
        assert response.get_json()['errors'] == ['File is empty']

    def test_import_missing_content(self, client):
        """Test: JSON without content returns 400."""
        response = client.post('/api/squad/import', json={'team_name': 'Mine'})

        assert response.status_code == 400
        assert response.get_json()['errors'][0].startswith('content:')

    def test_import_bad_rows_still_succeed(self, client):
        """Test: Row errors are advisory and returned with a 200."""
        content = 'Name,Position,Team,ProjectedPoints\nAlisson,GK,LIV,5.8\nBroken Row'
        response = client.post('/api/squad/import', json={'content': content})
        data = response.get_json()

        assert response.status_code == 200
        assert len(data['players']) == 1
        assert data['errors'][0].startswith('Line 2: Invalid format')

    def test_import_too_large(self, client):
        """Test: Uploads over the request limit return a JSON 413."""
        response = client.post(
            '/api/squad/import',
            data={'csv_file': (BytesIO(b'x' * (128 * 1024)), 'squad.csv')},
            content_type='multipart/form-data'
        )

        assert response.status_code == 413
        assert response.get_json() == {'errors': ['Upload too large']}


class TestPlayersRoute:
    """Test the data feed player endpoint."""

    FEED = {
        'elements': [
            {'id': 1, 'web_name': 'Raya', 'element_type': 1, 'team': 1, 'now_cost': 55,
             'form': '4.0', 'points_per_game': '4.5', 'total_points': 120, 'status': 'a'},
            {'id': 302, 'web_name': 'Salah', 'element_type': 3, 'team': 14, 'now_cost': 130,
             'form': '8.0', 'points_per_game': '7.5', 'total_points': 211, 'status': 'a'},
            {'id': 7, 'web_name': 'Saka', 'element_type': 3, 'team': 1, 'now_cost': 100,
             'form': '5.0', 'points_per_game': '6.0', 'total_points': 180, 'status': 'd',
             'chance_of_playing_this_round': 75},
        ],
        'teams': [{'id': 1, 'short_name': 'ARS'}, {'id': 14, 'short_name': 'LIV'}],
    }

    def test_search(self, client):
        """Test: Club search returns mapped players, best first."""
        response = client.post('/api/squad/players', json=dict(self.FEED, search='ars'))
        data = response.get_json()

        assert response.status_code == 200
        assert data['count'] == 2
        assert [p['name'] for p in data['players']] == ['Saka', 'Raya']
        assert data['players'][0]['injury_status'] == 'Questionable'
        assert data['players'][0]['projected_points'] == 4.5

    def test_position_filter(self, client):
        """Test: Position filter keeps goalkeepers only."""
        data = client.post('/api/squad/players', json=dict(self.FEED, position='GKP')).get_json()

        assert [p['id'] for p in data['players']] == ['1']
        assert data['players'][0]['price'] == 5.5

    def test_picks(self, client):
        """Test: Team picks resolve to players in pick order."""
        payload = dict(self.FEED, picks=[{'element': 302}, {'element': 1}, {'element': 404}])
        data = client.post('/api/squad/players', json=payload).get_json()

        assert [p['name'] for p in data['players']] == ['Salah', 'Raya']

    def test_unknown_position(self, client):
        """Test: Unknown position filter returns 400."""
        response = client.post('/api/squad/players', json=dict(self.FEED, position='SWEEPER'))

        assert response.status_code == 400
        assert response.get_json()['errors'][0].startswith('position:')

    def test_missing_elements(self, client):
        """Test: Body without feed elements returns 400."""
        response = client.post('/api/squad/players', json={'search': 'sa'})

        assert response.status_code == 400
        assert response.get_json()['errors'][0].startswith('elements:')


class TestSampleCSVRoute:
    """Test the sample download."""

    def test_sample_download(self, client):
        """Test: Sample is served as a CSV attachment."""
        response = client.get('/api/squad/sample-csv')

        assert response.status_code == 200
        assert response.mimetype == 'text/csv'
        assert 'sample_squad.csv' in response.headers.get('Content-Disposition', '')
        assert response.data.startswith(b'Name,Position,Team,ProjectedPoints')
