"""Routes package for the AskVerba application."""


def register_routes(app):
    """Register all route blueprints with the application."""
    from .auth import auth_bp
    from .translate import translate_bp
    from .translation_history import history_bp
    from .vocabulary import vocabulary_bp
    from .achievements import achievements_bp, user_achievements_bp
    from .practice_sessions import practice_bp, practice_sessions_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(translate_bp, url_prefix='/api/translate')
    app.register_blueprint(history_bp, url_prefix='/api/translation-history')
    app.register_blueprint(vocabulary_bp, url_prefix='/api/vocabulary')
    app.register_blueprint(achievements_bp, url_prefix='/api/achievements')
    app.register_blueprint(user_achievements_bp, url_prefix='/api/user-achievements')
    app.register_blueprint(practice_bp, url_prefix='/api/practice')
    app.register_blueprint(practice_sessions_bp, url_prefix='/api/practice-sessions')
