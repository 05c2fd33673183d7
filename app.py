"""Railway entry point - exposes the Flask app of the roadmap server."""
from roadmap.server import app, socketio

if __name__ == "__main__":
    socketio.run(app, host="0.0.0.0", port=5000, allow_unsafe_werkzeug=True)
