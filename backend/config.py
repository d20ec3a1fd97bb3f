import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma-separated list, or '*' for any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Matchmaking
    ROOM_CAPACITY = int(os.environ.get('ROOM_CAPACITY', '4'))
    # Player count at which the race clock starts
    START_THRESHOLD = int(os.environ.get('START_THRESHOLD', '2'))
    ROOM_ID_LENGTH = int(os.environ.get('ROOM_ID_LENGTH', '6'))
    # 'first_input': first time the buffer becomes non-empty
    # 'first_char': only when the buffer is exactly one character long
    TYPING_CLOCK_TRIGGER = os.environ.get('TYPING_CLOCK_TRIGGER', 'first_input')
    REGENERATE_TEXT_ON_RESTART = os.environ.get('REGENERATE_TEXT_ON_RESTART', '1').lower() not in ('0', 'false', 'no')
    # Optional: inline passage pool (list of strings); RACE_TEXTS_PATH wins when both are set
    RACE_TEXTS = None
    # Optional: file with one passage per line. Unset uses the built-in passage.
    RACE_TEXTS_PATH = os.environ.get('RACE_TEXTS_PATH')
