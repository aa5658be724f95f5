"""
Pytest configuration and fixtures for testing the AskVerba API.
"""

import os
import sys
import pytest
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from askverba import create_app, db
from askverba.errors import AIGenerationError
from askverba.models import User, Achievement

fake = Faker()

SIMPLE_RESULT = {'translation': 'Halo, apa kabar?'}

SINGLE_TERM_RESULT = {
    'type': 'single_term',
    'data': {
        'title': '✨ **serendipity** ✨',
        'main_translation': '📝 **Main Translation:** kebetulan yang menyenangkan',
        'meanings': '📚 **Meanings & Nuance:** ...',
        'linguistic_analysis': '🔍 **Linguistic Analysis:** ...',
        'examples': '✏️ **Examples:** ...',
        'collocations': '🔄 **Collocations:** ...',
        'comparisons': '⚖️ **Similar Words:** ...',
        'usage_tips': '💡 **Usage Tips:** ...',
    },
}

PARAGRAPH_RESULT = {
    'type': 'paragraph',
    'data': {
        'title': '✨ **Text Analysis: A quiet morning** ✨',
        'full_translation': '📝 **Full Translation:** Pagi itu sangat tenang.',
        'structure_analysis': '🔍 ...',
        'key_vocabulary': '📚 ...',
        'cultural_context': '🌐 ...',
        'stylistic_notes': '✍️ ...',
        'alternative_translations': '⚙️ ...',
        'learning_points': '🎯 ...',
    },
}


class FakeAI:
    """Stands in for the AI collaborator. Runs the real validator on canned output."""
    
    def __init__(self):
        self.calls = []
        self.responses = {}
        self.error = None
    
    def respond(self, prompt_contains, obj):
        self.responses[prompt_contains] = obj
    
    def generate_object(self, system_prompt, prompt, validator, model=None, temperature=0.3):
        self.calls.append({'prompt': prompt, 'model': model})
        if self.error:
            raise self.error
        for key, obj in self.responses.items():
            if key in system_prompt:
                try:
                    return validator(obj)
                except (ValueError, TypeError, KeyError) as e:
                    raise AIGenerationError(str(e)) from e
        raise AssertionError('No fake AI response registered for this prompt')


class FakeRedis:
    """In-memory stand-in for the parts of redis.Redis the app uses."""
    
    def __init__(self):
        self.store = {}
        self.ttls = {}
        self.read_error = None
    
    def ping(self):
        return True
    
    def get(self, key):
        if self.read_error:
            raise self.read_error
        return self.store.get(key)
    
    def set(self, key, value):
        self.store[key] = value
        return True
    
    def setex(self, key, ttl, value):
        self.ttls[key] = ttl
        self.store[key] = value
        return True
    
    def exists(self, key):
        return int(key in self.store)


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    os.environ['FLASK_ENV'] = 'testing'
    
    app = create_app('testing', test_config={
        'JWT_SECRET_KEY': 'test-secret-key-for-testing',
        'OPENAI_API_KEY': None,
        'AI_SIMPLE_MODEL': 'test-simple-model',
        'AI_DETAILED_MODEL': 'test-detailed-model',
    })
    
    with app.app_context():
        db.create_all()
    
    yield app
    
    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture
def fake_ai(monkeypatch):
    """Replace the AI client with canned, validated responses."""
    from askverba.services import ai_client
    
    fake_client = FakeAI()
    fake_client.respond('contextual translator', SIMPLE_RESULT)
    fake_client.respond('vocabulary tutor', PARAGRAPH_RESULT)
    monkeypatch.setattr(ai_client, 'generate_object', fake_client.generate_object)
    return fake_client


@pytest.fixture
def fake_redis(monkeypatch):
    """Route cache and revocation calls to an in-memory Redis."""
    from askverba.services import redis_client
    
    fake = FakeRedis()
    monkeypatch.setattr(redis_client, 'get_redis', lambda: fake)
    return fake


def _create_user(password='testpassword123', **overrides):
    """Helper to create a user with sensible defaults."""
    data = {
        'name': fake.name(),
        'email': fake.unique.email(),
    }
    data.update(overrides)
    user = User(**data)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return {
        'id': user.id,
        'name': user.name,
        'email': user.email,
        'password': password,
    }


@pytest.fixture
def test_user(app, db_session):
    """Create a test user."""
    return _create_user()


@pytest.fixture
def second_user(app, db_session):
    """Create a second test user for ownership tests."""
    return _create_user(password='testpassword456')


def _login(client, user):
    resp = client.post('/api/auth/login', json={
        'email': user['email'],
        'password': user['password'],
    })
    if resp.status_code != 200:
        raise RuntimeError(f"Login failed: status={resp.status_code}, body={resp.get_json()}")
    return resp.get_json()['token']


@pytest.fixture
def auth_client(client, test_user):
    """Test client carrying the test user's auth cookies."""
    _login(client, test_user)
    return client


@pytest.fixture
def second_auth_client(app, second_user):
    """Separate client logged in as the second user."""
    other = app.test_client()
    _login(other, second_user)
    return other


@pytest.fixture
def auth_headers(client, test_user):
    """Bearer header for the test user, for clients without cookies."""
    return {'Authorization': f"Bearer {_login(client, test_user)}"}


@pytest.fixture
def achievement(app, db_session):
    """A single active catalog achievement."""
    achievement = Achievement(
        slug='first-translation',
        title='First Steps',
        description='Complete your first translation',
        category='translation',
        difficulty='bronze',
        requirement_type='translations_count',
        target=1,
        experience_points=10,
    )
    db.session.add(achievement)
    db.session.commit()
    return {'id': achievement.id, 'slug': achievement.slug}
