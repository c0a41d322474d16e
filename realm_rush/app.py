# realm_rush/app.py
from flask import Flask
from flask_socketio import SocketIO

from . import init_arena

def create_app(config=None):
    app = Flask(__name__)
    app.config["SECRET_KEY"] = "realm-rush-dev"
    if config:
        app.config.update(config)
    socketio = SocketIO(app)
    init_arena(app, socketio)
    return app, socketio

if __name__ == "__main__":
    app, socketio = create_app()
    socketio.run(app, host="127.0.0.1", port=5000)
