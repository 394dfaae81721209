from flask import request
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_limiter import Limiter

db = SQLAlchemy()

migrate = Migrate()


# Custom function to get the real IP address
def get_real_ip():
    if request.headers.get('X-Forwarded-For'):
        # X-Forwarded-For can contain multiple IP addresses, we need the first one
        return request.headers.get('X-Forwarded-For').split(',')[0].strip()
    return request.remote_addr


# Storage comes from RATELIMIT_STORAGE_URI in the app config
limiter = Limiter(get_real_ip)
