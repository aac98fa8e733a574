"""
Test settings: in-memory SQLite, fast password hashing.
"""
import os

os.environ.setdefault('DATABASE_URL', 'sqlite://:memory:')

from .base import *

DEBUG = False

DATABASES = {
    'default': env.db_url_config('sqlite://:memory:'),
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
