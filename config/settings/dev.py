"""
Development settings
"""
from .base import *

DEBUG = True

LOGGING['root']['level'] = env('LOG_LEVEL', default='DEBUG')
