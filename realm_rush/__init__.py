# realm_rush/__init__.py
from .routes import arena_bp
from .sockets import register_arena_socket_handlers

CONFIG_DEFAULTS = {
    "ARENA_AI_THINK_SECONDS": 1.0,
    "ARENA_RESOLVE_SECONDS": 1.5,
    "ARENA_MIRROR_PATH": None,
}

def init_arena(app, socketio):
    for key, value in CONFIG_DEFAULTS.items():
        app.config.setdefault(key, value)
    app.register_blueprint(arena_bp)
    register_arena_socket_handlers(socketio)
