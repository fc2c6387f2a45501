# beantrace/security.py
from flask_bcrypt import Bcrypt
from flask_jwt_extended import JWTManager

bcrypt = Bcrypt()
jwt = JWTManager()


def init_security(app):
    """
    Bind bcrypt (reads BCRYPT_LOG_ROUNDS) and JWT (reads JWT_SECRET_KEY)
    to the app. Must run after load_config.
    """
    bcrypt.init_app(app)
    jwt.init_app(app)
    return app
