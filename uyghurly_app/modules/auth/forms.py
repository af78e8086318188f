# File: uyghurly_app/modules/auth/forms.py
# Login and sign-up forms. The JSON API feeds them request bodies.

import re

from flask_wtf import FlaskForm
from wtforms import PasswordField, StringField
from wtforms.validators import DataRequired, EqualTo, Length, Regexp, ValidationError

USERNAME_PATTERN = r'^[a-zA-Z0-9_]+$'

STRENGTH_LABELS = ('Very Weak', 'Weak', 'Fair', 'Good', 'Strong')


def validate_password(password):
    """
    Return the first rule ``password`` breaks, or None when it is acceptable.
    """
    password = password or ''
    if len(password) < 8:
        return 'Password must be at least 8 characters long'
    if not re.search(r'\d', password):
        return 'Password must contain at least one number'
    if not re.search(r'[a-zA-Z]', password):
        return 'Password must contain at least one letter'
    if not re.search(r'[A-Z]', password):
        return 'Password must contain at least one capital letter'
    return None


def password_strength(password):
    """Score 0-4 (one point per rule met) and its label."""
    password = password or ''
    if not password:
        return 0, 'Enter password'
    score = sum((
        len(password) >= 8,
        bool(re.search(r'\d', password)),
        bool(re.search(r'[a-zA-Z]', password)),
        bool(re.search(r'[A-Z]', password)),
    ))
    return score, STRENGTH_LABELS[score]


class StrongPassword:
    """WTForms validator wrapping :func:`validate_password`."""

    def __call__(self, form, field):
        problem = validate_password(field.data)
        if problem:
            raise ValidationError(problem)


class LoginForm(FlaskForm):
    email = StringField('Email', validators=[DataRequired(message='Please enter your email.')])
    password = PasswordField('Password', validators=[DataRequired(message='Please enter your password.')])


class SignUpForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(message='Please enter your name.')])
    username = StringField('Username', validators=[
        DataRequired(message='Please choose a username.'),
        Length(min=3, message='Username must be at least 3 characters long'),
        Regexp(USERNAME_PATTERN, message='Username can only contain letters, numbers, and underscores'),
    ])
    email = StringField('Email', validators=[DataRequired(message='Please enter your email.')])
    password = PasswordField('Password', validators=[
        DataRequired(message='Please create a password.'),
        StrongPassword(),
    ])
    confirm_password = PasswordField('Confirm password', validators=[
        DataRequired(message='Please confirm your password.'),
        EqualTo('password', message='Passwords do not match'),
    ])

    def validate_email(self, field):
        if '@' not in (field.data or ''):
            raise ValidationError('Please enter a valid email address.')
