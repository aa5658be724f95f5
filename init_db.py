#!/usr/bin/env python
"""Database initialization script for the AskVerba backend.

This script creates all database tables based on the SQLAlchemy models.
Run this once before starting the application for the first time.

Usage:
    python init_db.py
"""

import os
import sys
from askverba import create_app, db

TABLES_INFO = [
    ("users", "Learner accounts and authentication"),
    ("translation_history", "Saved translations"),
    ("translation_cache", "AI translation results by text and mode"),
    ("vocabulary", "Collected words and practice status"),
    ("achievements", "Achievement catalog"),
    ("user_achievements", "Per-user achievement progress"),
    ("practice_sessions", "Completed practice runs"),
]


def init_database():
    """Initialize the database by creating all tables."""
    
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)
    
    print(f"\n{'='*60}")
    print(f"Database Initialization for {config_name.upper()} Environment")
    print(f"{'='*60}\n")
    
    with app.app_context():
        try:
            print("Creating database tables...")
            print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}\n")
            
            db.create_all()
            
            print("Created tables:")
            for table_name, description in TABLES_INFO:
                print(f"  ✓ {table_name:<25} - {description}")
            
            print("\nNext steps:")
            print("  1. Seed achievements: python scripts/seed_achievements.py")
            print("  2. Start the Flask server: python wsgi.py")
            print("\n")
            
            return True
            
        except Exception as e:
            print(f"❌ Error creating database: {type(e).__name__}: {e}\n")
            return False


if __name__ == '__main__':
    success = init_database()
    sys.exit(0 if success else 1)
