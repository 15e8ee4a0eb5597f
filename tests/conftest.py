"""
Pytest Configuration and Fixtures

Provides shared fixtures for testing the Flask application using the
application factory pattern, plus service instances and squad builders.
"""

import os
import itertools

import pytest

# Config raises at import time without a secret key
os.environ.setdefault('SECRET_KEY', 'test-secret-key-for-pytest')
os.environ.setdefault('FLASK_ENV', 'testing')


@pytest.fixture(scope='session')
def test_config():
    """Test configuration class."""
    from config import TestingConfig
    return TestingConfig


@pytest.fixture
def app(test_config):
    """
    Create and configure a Flask application instance for testing.

    Uses the application factory pattern to create a clean instance
    for each test function.
    """
    from app import create_app
    app = create_app(test_config)

    # Push application context
    ctx = app.app_context()
    ctx.push()

    yield app

    # Clean up
    ctx.pop()


@pytest.fixture
def client(app):
    """
    Flask test client for making HTTP requests.

    Provides a test client that can make requests to the application
    without running a live server.
    """
    return app.test_client()


@pytest.fixture
def grader():
    """TeamGraderService instance."""
    from services import TeamGraderService
    return TeamGraderService()


@pytest.fixture
def csv_service():
    """RosterCSVService class (classmethod API)."""
    from services import RosterCSVService
    return RosterCSVService


@pytest.fixture
def builder():
    """SquadBuilderService class (static API)."""
    from services import SquadBuilderService
    return SquadBuilderService


@pytest.fixture
def make_player():
    """
    Factory for Player models with unique ids.

    Usage: make_player('MID', projected_points=8.5, price=10.0)
    """
    from models import Player, Position

    counter = itertools.count(1)

    def _make(position='MID', name=None, team='TST', **kwargs):
        number = next(counter)
        return Player(
            id=kwargs.pop('id', f"p{number}"),
            name=name or f"Player {number}",
            position=Position(position),
            team=team,
            **kwargs
        )

    return _make


@pytest.fixture
def strong_starting_xi(make_player):
    """
    A 3-4-3 starting lineup projected at 101 points costing 99.0.

    Every starter is projected above 4 points; seven are captain options.
    """
    return [
        make_player('GK', name='Alisson', team='LIV', price=5.5, projected_points=5.8),
        make_player('DEF', name='Virgil van Dijk', team='LIV', price=6.5, projected_points=6.2),
        make_player('DEF', name='Trent Alexander-Arnold', team='LIV', price=7.0, projected_points=8.5),
        make_player('DEF', name='Kyle Walker', team='MCI', price=5.5, projected_points=5.5),
        make_player('MID', name='Mohamed Salah', team='LIV', price=13.0, projected_points=13.0),
        make_player('MID', name='Kevin De Bruyne', team='MCI', price=10.5, projected_points=10.5),
        make_player('MID', name='Bruno Fernandes', team='MUN', price=8.5, projected_points=8.5),
        make_player('MID', name='Bukayo Saka', team='ARS', price=9.0, projected_points=7.5),
        make_player('FWD', name='Erling Haaland', team='MCI', price=14.0, projected_points=14.0),
        make_player('FWD', name='Harry Kane', team='BAY', price=11.5, projected_points=12.5),
        make_player('FWD', name='Ollie Watkins', team='AVL', price=8.0, projected_points=9.0),
    ]


@pytest.fixture
def strong_squad(builder, strong_starting_xi):
    """Squad built from the strong starting XI with an empty bench."""
    return builder.build_squad('Test FC', strong_starting_xi, [], '3-4-3')


@pytest.fixture
def squad_payload(strong_starting_xi):
    """JSON payload for the analyze endpoint."""
    return {
        'name': 'Test FC',
        'formation': '3-4-3',
        'starting': [p.to_dict() for p in strong_starting_xi],
        'bench': [],
    }


@pytest.fixture
def sample_csv(csv_service):
    """The sample import file."""
    return csv_service.generate_sample_csv()
