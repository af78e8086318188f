"""
Central Signal Registry for Event-Driven Architecture.

Uses blinker (Flask's signal backend) to decouple modules.

Usage:
    # Publisher (sender)
    from uyghurly_app.core.signals import quiz_completed
    quiz_completed.send(app, user_id='abc', unit_id='food', result={...})

    # Subscriber (receiver) - in module's events.py
    @quiz_completed.connect
    def on_quiz_completed(sender, **kwargs):
        ...
"""
from blinker import Namespace

# ============================================
# Account Signals
# ============================================
account_signals = Namespace()

# Payload: user (User)
user_registered = account_signals.signal('user_registered')

# Payload: user (User), provider ('password' | 'google')
user_logged_in = account_signals.signal('user_logged_in')

# Payload: user (User), changes (list[str])
profile_updated = account_signals.signal('profile_updated')

# ============================================
# Learning Signals
# ============================================
learning_signals = Namespace()

# Fired after a lesson record is written to device storage.
# Payload: user_id (str | None), unit_id, slug, record (dict), unit_completed (bool)
lesson_completed = learning_signals.signal('lesson_completed')

# Fired after a quiz result is written to device storage.
# Payload: user_id (str | None), unit_id, result (dict)
quiz_completed = learning_signals.signal('quiz_completed')
