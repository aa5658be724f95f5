"""
Tests for achievement catalog and user achievement endpoints.
"""

import pytest

from askverba import db
from askverba.models import Achievement, UserAchievement


def _add_achievement(slug, **overrides):
    data = {
        'slug': slug,
        'title': slug.replace('-', ' ').title(),
        'description': 'Test achievement',
        'category': 'vocabulary',
        'requirement_type': 'words_learned',
        'target': 10,
    }
    data.update(overrides)
    achievement = Achievement(**data)
    db.session.add(achievement)
    db.session.commit()
    return achievement.id


class TestAchievementCatalog:
    """Tests for GET /api/achievements"""
    
    def test_public_and_ordered(self, client, db_session):
        _add_achievement('second', order=2)
        _add_achievement('first', order=1)
        _add_achievement('secret', is_hidden=True)
        _add_achievement('retired', is_active=False)
        
        response = client.get('/api/achievements')
        
        assert response.status_code == 200
        assert [a['slug'] for a in response.json['docs']] == ['first', 'second']
    
    def test_catalog_shape(self, client, achievement):
        doc = client.get('/api/achievements').json['docs'][0]
        
        assert doc['requirements'] == {'type': 'translations_count', 'target': 1}
        assert doc['rewards'] == {'experiencePoints': 10}
        assert doc['difficulty'] == 'bronze'


class TestUserAchievements:
    """Tests for /api/user-achievements"""
    
    def test_requires_auth(self, client, db_session):
        assert client.get('/api/user-achievements').status_code == 401
    
    def test_create_progress(self, auth_client, achievement):
        response = auth_client.post('/api/user-achievements', json={
            'achievementId': achievement['id'],
            'progress': 40
        })
        
        assert response.status_code == 201
        assert response.json['progress'] == 40
        assert response.json['isUnlocked'] is False
        assert response.json['unlockedAt'] is None
        assert response.json['achievement']['slug'] == 'first-translation'
    
    def test_update_existing(self, auth_client, test_user, achievement):
        auth_client.post('/api/user-achievements', json={'achievementId': achievement['id'], 'progress': 10})
        
        response = auth_client.post('/api/user-achievements', json={'achievementId': achievement['id'], 'progress': 60})
        
        assert response.status_code == 200
        assert response.json['progress'] == 60
        assert UserAchievement.query.filter_by(user_id=test_user['id']).count() == 1
    
    @pytest.mark.parametrize('given,stored', [
        (150, 100),
        (-20, 0),
        (55.7, 55),
        (float('inf'), 100),
        (float('-inf'), 0),
        (1e308, 100),
        (10 ** 400, 100),
    ])
    def test_progress_is_clamped(self, auth_client, achievement, given, stored):
        response = auth_client.post('/api/user-achievements', json={
            'achievementId': achievement['id'],
            'progress': given
        })
        
        assert response.json['progress'] == stored
    
    def test_full_progress_does_not_unlock(self, auth_client, achievement):
        response = auth_client.post('/api/user-achievements', json={
            'achievementId': achievement['id'],
            'progress': 100
        })
        
        assert response.json['progress'] == 100
        assert response.json['isUnlocked'] is False
        assert response.json['unlockedAt'] is None
    
    def test_unlock_stamps_time_once(self, auth_client, achievement):
        first = auth_client.post('/api/user-achievements', json={
            'achievementId': achievement['id'],
            'isUnlocked': True
        })
        again = auth_client.post('/api/user-achievements', json={
            'achievementId': achievement['id'],
            'isUnlocked': True,
            'progress': 100
        })
        
        assert first.json['unlockedAt'] is not None
        assert again.json['unlockedAt'] == first.json['unlockedAt']
    
    def test_list_counts_unlocked(self, auth_client, achievement):
        other_id = _add_achievement('ten-words')
        auth_client.post('/api/user-achievements', json={'achievementId': achievement['id'], 'isUnlocked': True})
        auth_client.post('/api/user-achievements', json={'achievementId': other_id, 'progress': 30})
        
        response = auth_client.get('/api/user-achievements')
        
        assert response.json['totalDocs'] == 2
        assert response.json['unlockedCount'] == 1
    
    def test_only_own_records(self, auth_client, second_auth_client, achievement):
        second_auth_client.post('/api/user-achievements', json={'achievementId': achievement['id'], 'progress': 50})
        
        response = auth_client.get('/api/user-achievements')
        
        assert response.json['totalDocs'] == 0
    
    @pytest.mark.parametrize('payload', [
        {},
        {'achievementId': 'first-translation'},
        {'achievementId': 1, 'progress': 'half'},
        {'achievementId': 1, 'isUnlocked': 'yes'},
    ])
    def test_invalid_payload(self, auth_client, achievement, payload):
        response = auth_client.post('/api/user-achievements', json=payload)
        
        assert response.status_code == 400
    
    def test_nan_progress_is_rejected(self, auth_client, test_user, achievement):
        response = auth_client.post('/api/user-achievements', json={
            'achievementId': achievement['id'],
            'progress': float('nan')
        })
        
        assert response.status_code == 400
        assert response.json['error'] == 'progress must be a number'
        assert UserAchievement.query.filter_by(user_id=test_user['id']).count() == 0
    
    def test_body_must_be_object(self, auth_client, achievement):
        response = auth_client.post('/api/user-achievements', json=[achievement['id'], 50])
        
        assert response.status_code == 400
        assert response.json['error'] == 'Request body must be a JSON object'
    
    def test_unknown_achievement(self, auth_client, achievement):
        response = auth_client.post('/api/user-achievements', json={'achievementId': achievement['id'] + 100})
        
        assert response.status_code == 404


class TestUserAchievementModel:
    
    def test_relock_keeps_flag_consistent(self):
        record = UserAchievement(progress=0, is_unlocked=False)
        record.set_unlocked(True)
        stamped = record.unlocked_at
        record.set_unlocked(False)
        record.set_unlocked(True)
        
        assert record.is_unlocked is True
        assert record.unlocked_at >= stamped
