#!/usr/bin/env python3
"""Seed the achievement catalog. Existing slugs are updated in place."""

import sys
import os

# Add parent directory to path to import askverba modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from askverba import create_app, db
from askverba.models import Achievement

ACHIEVEMENTS_DATA = [
    {'slug': 'first-translation', 'title': 'First Steps', 'description': 'Complete your first translation',
     'category': 'translation', 'difficulty': 'bronze', 'icon': '🌱',
     'requirement_type': 'translations_count', 'target': 1, 'experience_points': 10},
    {'slug': 'translator-50', 'title': 'Busy Translator', 'description': 'Complete 50 translations',
     'category': 'translation', 'difficulty': 'silver', 'icon': '📝',
     'requirement_type': 'translations_count', 'target': 50, 'experience_points': 50},
    {'slug': 'translator-500', 'title': 'Master Translator', 'description': 'Complete 500 translations',
     'category': 'translation', 'difficulty': 'gold', 'icon': '🏆',
     'requirement_type': 'translations_count', 'target': 500, 'experience_points': 200},
    {'slug': 'words-10', 'title': 'Word Collector', 'description': 'Save 10 words to your vocabulary',
     'category': 'vocabulary', 'difficulty': 'bronze', 'icon': '📚',
     'requirement_type': 'words_learned', 'target': 10, 'experience_points': 20},
    {'slug': 'words-100', 'title': 'Lexicon Builder', 'description': 'Master 100 words',
     'category': 'vocabulary', 'difficulty': 'gold', 'icon': '🧠',
     'requirement_type': 'words_learned', 'target': 100, 'experience_points': 150},
    {'slug': 'streak-7', 'title': 'Week Warrior', 'description': 'Practice 7 days in a row',
     'category': 'streak', 'difficulty': 'silver', 'icon': '🔥',
     'requirement_type': 'streak_days', 'target': 7, 'experience_points': 70},
    {'slug': 'streak-30', 'title': 'Unstoppable', 'description': 'Practice 30 days in a row',
     'category': 'streak', 'difficulty': 'platinum', 'icon': '⚡',
     'requirement_type': 'streak_days', 'target': 30, 'experience_points': 300},
    {'slug': 'accuracy-90', 'title': 'Sharp Mind', 'description': 'Score 90% or more in a practice session',
     'category': 'accuracy', 'difficulty': 'silver', 'icon': '🎯',
     'requirement_type': 'accuracy_percentage', 'target': 90, 'experience_points': 60},
    {'slug': 'study-10h', 'title': 'Dedicated Learner', 'description': 'Spend 10 hours practicing',
     'category': 'study-time', 'difficulty': 'gold', 'icon': '⏱️',
     'requirement_type': 'study_time_hours', 'target': 10, 'experience_points': 120},
]


def seed_achievements():
    app = create_app()
    with app.app_context():
        created = updated = 0
        for order, data in enumerate(ACHIEVEMENTS_DATA):
            achievement = Achievement.query.filter_by(slug=data['slug']).first()
            if achievement:
                updated += 1
            else:
                achievement = Achievement(slug=data['slug'])
                db.session.add(achievement)
                created += 1
            for key, value in data.items():
                setattr(achievement, key, value)
            achievement.order = order
        db.session.commit()
        print(f"Achievements seeded: {created} created, {updated} updated")


if __name__ == '__main__':
    seed_achievements()
