"""
Tests for vocabulary endpoints.
"""

import pytest

from askverba import db
from askverba.errors import AIGenerationError
from askverba.models import Vocabulary
from askverba.models.vocabulary import calculate_status
from askverba.services.vocabulary import validate_extraction


def _create_vocab(user_id, word='serendipity', translation='kebetulan', **overrides):
    vocab = Vocabulary(user_id=user_id, word=word, translation=translation, **overrides)
    db.session.add(vocab)
    db.session.commit()
    return vocab.id


EXTRACTION_RESULT = {
    'vocabulary': [
        {'word': 'breathtaking', 'translation': 'menakjubkan', 'type': 'adjective',
         'difficulty': 'medium', 'context': 'The view was breathtaking.'},
        {'word': 'wander', 'translation': 'berkeliling', 'type': 'verb',
         'difficulty': 'easy', 'context': 'We wander through the market.'},
        {'word': 'x', 'translation': 'y', 'type': 'noun', 'difficulty': 'easy', 'context': 'too short'},
        {'word': 'market', 'translation': 'pasar', 'type': 'building', 'difficulty': 'easy', 'context': 'bad type'},
    ]
}


class TestVocabularyCrud:
    """Tests for vocabulary CRUD."""
    
    def test_requires_auth(self, client, db_session):
        assert client.get('/api/vocabulary').status_code == 401
        assert client.post('/api/vocabulary', json={'word': 'a', 'translation': 'b'}).status_code == 401
    
    def test_create(self, auth_client, test_user):
        response = auth_client.post('/api/vocabulary', json={
            'word': ' resilient ',
            'translation': 'tangguh',
            'type': 'adjective',
            'difficulty': 'hard',
            'tags': ['character']
        })
        
        assert response.status_code == 201
        assert response.json['word'] == 'resilient'
        assert response.json['type'] == 'adjective'
        assert response.json['status'] == 'new'
        assert response.json['practiceCount'] == 0
        assert response.json['customer'] == test_user['id']
    
    def test_create_defaults(self, auth_client):
        response = auth_client.post('/api/vocabulary', json={'word': 'book', 'translation': 'buku'})
        
        assert response.json['difficulty'] == 'medium'
        assert response.json['sourceLanguage'] == 'English'
        assert response.json['targetLanguage'] == 'Indonesian'
        assert response.json['tags'] == []
    
    def test_duplicate_word_case_insensitive(self, auth_client, test_user):
        _create_vocab(test_user['id'], word='Serendipity')
        
        response = auth_client.post('/api/vocabulary', json={'word': 'serendipity', 'translation': 'kebetulan'})
        
        assert response.status_code == 409
    
    def test_same_word_for_different_users(self, auth_client, second_user):
        _create_vocab(second_user['id'], word='serendipity')
        
        response = auth_client.post('/api/vocabulary', json={'word': 'serendipity', 'translation': 'kebetulan'})
        
        assert response.status_code == 201
    
    @pytest.mark.parametrize('payload', [
        {'translation': 'buku'},
        {'word': '  ', 'translation': 'buku'},
        {'word': 'book', 'translation': 'buku', 'type': 'gerund'},
        {'word': 'book', 'translation': 'buku', 'difficulty': 'extreme'},
        {'word': 'book', 'translation': 'buku', 'status': 'forgotten'},
        {'word': 'book', 'translation': 'buku', 'tags': 'reading'},
        {'word': 'book', 'translation': 'buku', 'practiceCount': 10},
        {'word': 'b' * 201, 'translation': 'buku'},
    ])
    def test_create_invalid(self, auth_client, payload):
        response = auth_client.post('/api/vocabulary', json=payload)
        
        assert response.status_code == 400
    
    def test_list_and_filters(self, auth_client, test_user):
        _create_vocab(test_user['id'], word='run', translation='lari', word_type='verb', status='learning')
        _create_vocab(test_user['id'], word='happy', translation='senang', word_type='adjective')
        
        all_items = auth_client.get('/api/vocabulary')
        learning = auth_client.get('/api/vocabulary?status=learning')
        verbs = auth_client.get('/api/vocabulary?type=verb')
        search = auth_client.get('/api/vocabulary?search=senang')
        
        assert all_items.json['totalDocs'] == 2
        assert [d['word'] for d in learning.json['docs']] == ['run']
        assert [d['word'] for d in verbs.json['docs']] == ['run']
        assert [d['word'] for d in search.json['docs']] == ['happy']
    
    def test_get_update_delete(self, auth_client, test_user):
        vocab_id = _create_vocab(test_user['id'])
        
        assert auth_client.get(f'/api/vocabulary/{vocab_id}').json['word'] == 'serendipity'
        
        updated = auth_client.patch(f'/api/vocabulary/{vocab_id}', json={'definition': 'a happy accident'})
        assert updated.status_code == 200
        assert updated.json['definition'] == 'a happy accident'
        
        assert auth_client.delete(f'/api/vocabulary/{vocab_id}').status_code == 200
        assert auth_client.get(f'/api/vocabulary/{vocab_id}').status_code == 404
    
    def test_update_to_existing_word(self, auth_client, test_user):
        _create_vocab(test_user['id'], word='run')
        vocab_id = _create_vocab(test_user['id'], word='walk')
        
        response = auth_client.patch(f'/api/vocabulary/{vocab_id}', json={'word': 'RUN'})
        
        assert response.status_code == 409
    
    @pytest.mark.parametrize('payload', [
        {'word': None},
        {'translation': None},
        {'word': '   '},
        {'difficulty': None},
        {'status': None},
        {'sourceLanguage': None},
    ])
    def test_update_rejects_null_required_fields(self, auth_client, test_user, payload):
        vocab_id = _create_vocab(test_user['id'])
        
        response = auth_client.patch(f'/api/vocabulary/{vocab_id}', json=payload)
        
        assert response.status_code == 400
        item = db.session.get(Vocabulary, vocab_id)
        assert item.word == 'serendipity'
        assert item.difficulty == 'medium'
    
    def test_update_allows_clearing_optional_fields(self, auth_client, test_user):
        vocab_id = _create_vocab(test_user['id'], definition='a happy accident')
        
        response = auth_client.patch(f'/api/vocabulary/{vocab_id}', json={'definition': None})
        
        assert response.status_code == 200
        assert response.json['definition'] is None
    
    def test_body_must_be_object(self, auth_client, test_user):
        vocab_id = _create_vocab(test_user['id'])
        
        created = auth_client.post('/api/vocabulary', json=['serendipity', 'kebetulan'])
        updated = auth_client.patch(f'/api/vocabulary/{vocab_id}', json='serendipity')
        progress = auth_client.patch(f'/api/vocabulary/{vocab_id}/progress', json=[True, 1])
        
        assert created.status_code == 400
        assert updated.status_code == 400
        assert progress.status_code == 400
        assert created.json['error'] == 'Request body must be a JSON object'
    
    def test_other_users_item_is_not_found(self, auth_client, second_user):
        vocab_id = _create_vocab(second_user['id'])
        
        assert auth_client.get(f'/api/vocabulary/{vocab_id}').status_code == 404
        assert auth_client.delete(f'/api/vocabulary/{vocab_id}').status_code == 404
    
    def test_stats(self, auth_client, test_user):
        _create_vocab(test_user['id'], word='one', status='mastered')
        _create_vocab(test_user['id'], word='two', status='learning')
        _create_vocab(test_user['id'], word='three')
        _create_vocab(test_user['id'], word='four')
        
        response = auth_client.get('/api/vocabulary/stats')
        
        assert response.json == {
            'totalWords': 4,
            'masteredWords': 1,
            'learningWords': 1,
            'newWords': 2
        }


class TestVocabularyProgress:
    """Tests for PATCH /api/vocabulary/<id>/progress"""
    
    @pytest.mark.parametrize('is_correct,attempts,expected', [
        (True, 1, 'learning'),
        (False, 1, 'new'),
        (True, 2, 'learning'),
        (True, 3, 'mastered'),
        (True, 7, 'mastered'),
        (False, 3, 'new'),
    ])
    def test_calculate_status(self, is_correct, attempts, expected):
        assert calculate_status(is_correct, attempts) == expected
    
    def test_record_progress(self, auth_client, test_user):
        vocab_id = _create_vocab(test_user['id'])
        
        first = auth_client.patch(f'/api/vocabulary/{vocab_id}/progress', json={'isCorrect': True, 'attempts': 1})
        second = auth_client.patch(f'/api/vocabulary/{vocab_id}/progress', json={'isCorrect': False, 'attempts': 2})
        
        assert first.status_code == 200
        assert first.json['newStatus'] == 'learning'
        assert second.json['newStatus'] == 'new'
        assert second.json['vocabulary']['practiceCount'] == 2
        assert second.json['vocabulary']['accuracy'] == 50
        assert second.json['vocabulary']['lastPracticed'] is not None
    
    def test_mastered_after_three_attempts(self, auth_client, test_user):
        vocab_id = _create_vocab(test_user['id'])
        
        response = auth_client.patch(f'/api/vocabulary/{vocab_id}/progress', json={'isCorrect': True, 'attempts': 3})
        
        assert response.json['newStatus'] == 'mastered'
    
    @pytest.mark.parametrize('payload', [
        {'attempts': 1},
        {'isCorrect': 'true', 'attempts': 1},
        {'isCorrect': True, 'attempts': 0},
        {'isCorrect': True, 'attempts': True},
        {'isCorrect': True},
    ])
    def test_invalid_progress(self, auth_client, test_user, payload):
        vocab_id = _create_vocab(test_user['id'])
        
        response = auth_client.patch(f'/api/vocabulary/{vocab_id}/progress', json=payload)
        
        assert response.status_code == 400
    
    def test_progress_on_missing_item(self, auth_client):
        response = auth_client.patch('/api/vocabulary/9999/progress', json={'isCorrect': True, 'attempts': 1})
        
        assert response.status_code == 404


class TestVocabularyExtraction:
    """Tests for POST /api/vocabulary/extract"""
    
    def test_extract(self, auth_client, fake_ai):
        fake_ai.respond('vocabulary analyst', EXTRACTION_RESULT)
        
        response = auth_client.post('/api/vocabulary/extract', json={
            'text': 'The view was breathtaking as we wander through the market.'
        })
        
        assert response.status_code == 200
        assert response.json['count'] == 2
        assert [v['word'] for v in response.json['vocabulary']] == ['breathtaking', 'wander']
        assert 'saved' not in response.json
        assert Vocabulary.query.count() == 0
    
    def test_extract_and_save_skips_existing(self, auth_client, test_user, fake_ai):
        fake_ai.respond('vocabulary analyst', EXTRACTION_RESULT)
        _create_vocab(test_user['id'], word='Wander', translation='mengembara')
        
        response = auth_client.post('/api/vocabulary/extract', json={
            'text': 'The view was breathtaking as we wander through the market.',
            'save': True
        })
        
        assert response.status_code == 200
        assert [v['word'] for v in response.json['saved']] == ['breathtaking']
        assert Vocabulary.query.filter_by(user_id=test_user['id']).count() == 2
    
    def test_extract_ai_failure(self, auth_client, fake_ai):
        fake_ai.error = AIGenerationError('quota exceeded')
        
        response = auth_client.post('/api/vocabulary/extract', json={'text': 'Some text here'})
        
        assert response.status_code == 500
        assert response.json == {'error': 'Failed to extract vocabulary'}
    
    @pytest.mark.parametrize('payload', [
        {},
        {'text': '   '},
        {'text': 'a' * 2001},
        {'text': 'hello there', 'save': 'yes'},
        ['The view was breathtaking.'],
    ])
    def test_extract_invalid(self, auth_client, fake_ai, payload):
        response = auth_client.post('/api/vocabulary/extract', json=payload)
        
        assert response.status_code == 400
        assert fake_ai.calls == []
    
    def test_validate_extraction_rejects_non_list(self):
        with pytest.raises(ValueError):
            validate_extraction({'vocabulary': 'breathtaking'})
    
    def test_validate_extraction_empty(self):
        assert validate_extraction({'vocabulary': []}) == {'vocabulary': []}
    
    def test_validate_extraction_cleans_items(self):
        result = validate_extraction({'vocabulary': [
            {'word': '  wander ', 'translation': 'berkeliling', 'type': 'verb',
             'difficulty': 'easy', 'context': 'We wander.', 'score': 9},
            {'word': 'ok', 'translation': 'oke', 'type': 'phrase', 'difficulty': 'easy', 'context': ''},
            {'word': 'market', 'translation': 'pasar', 'type': 'noun', 'difficulty': 'expert', 'context': 'At the market.'},
            {'word': 'pasar', 'translation': None, 'type': 'noun', 'difficulty': 'easy', 'context': 'x'},
            'market',
        ]})
        
        assert result == {'vocabulary': [
            {'word': 'wander', 'translation': 'berkeliling', 'type': 'verb',
             'difficulty': 'easy', 'context': 'We wander.'},
        ]}
