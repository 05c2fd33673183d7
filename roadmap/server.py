#!/usr/bin/env python3
"""
Roadmap Tracker - API server

Tracks a six-month learning roadmap, a project showcase and a daily
journal for one signed-in user at a time.

- Week completion is stored in Supabase (one row per user and week)
- Goal checkboxes stay on this machine (JSON file)
- Every change pushes the recomputed summary over Socket.IO

Usage:
    roadmap-tracker --port 5000
"""

import argparse
import threading
from datetime import date
from pathlib import Path

from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_socketio import SocketIO

from . import config
from .curriculum import load_curriculum, save_curriculum
from .errors import (
    AuthError,
    CacheWriteError,
    InvalidGoalError,
    NotFoundError,
    SyncError,
    ValidationError,
)
from .journal import JournalEntry, paginate
from .portfolio import ProjectDraft
from .progress import GoalChecklistCache, ProgressStore, RoadmapTracker
from .remote import connect
from .runner import BackgroundLoop

# Console colours
GREEN = "\033[92m"
CYAN = "\033[96m"
YELLOW = "\033[93m"
DIM = "\033[2m"
RESET = "\033[0m"


app = Flask(__name__)
CORS(app)
socketio = SocketIO(app, cors_allowed_origins="*", async_mode="threading")

loop = BackgroundLoop()

# Session state (one user at a time)
session_state = {
    "curriculum": None,
    "goal_cache": None,
    "backend": None,
    "user": None,
    "tracker": None,
    "lock": threading.Lock(),
}


def init_state(cache_path=None, curriculum_path=None):
    """Load the curriculum and hydrate the goal cache."""
    curriculum = load_curriculum(curriculum_path)
    goal_cache = GoalChecklistCache(curriculum, cache_path or config.CACHE_PATH)
    goal_cache.hydrate()

    with session_state["lock"]:
        session_state["curriculum"] = curriculum
        session_state["goal_cache"] = goal_cache
        session_state["user"] = None
        session_state["tracker"] = None


def remote(coro):
    """Run a backend call on the loop, bounded by the sync timeout."""
    return loop.run(coro, timeout=config.SYNC_TIMEOUT)


def request_data():
    """JSON object body of the request; a missing body gives {}."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def connect_backend():
    """Connect to Supabase with the configured project settings."""
    return remote(connect(config.SUPABASE_URL, config.SUPABASE_KEY))


def get_backend():
    with session_state["lock"]:
        backend = session_state["backend"]
    if backend is None:
        backend = connect_backend()
        with session_state["lock"]:
            session_state["backend"] = backend
    return backend


def current_session():
    """Returns (backend, user, tracker); user is None when signed out."""
    with session_state["lock"]:
        return session_state["backend"], session_state["user"], session_state["tracker"]


def not_logged_in():
    return jsonify({"error": "Not logged in"}), 401


def load_progress(tracker, user_id):
    """Load week completion; a failure leaves the tracker in its loading state."""
    try:
        loop.run(tracker.store.load(user_id))
        print(f"{GREEN}[SYNC]{RESET} Progress loaded: {len(tracker.store.completed_week_ids)} weeks complete")
        return None
    except SyncError as e:
        print(f"{YELLOW}[SYNC ERROR]{RESET} {e}")
        return str(e)


def emit_progress(tracker, week_view=None):
    if week_view is not None:
        socketio.emit("week", week_view)
    socketio.emit("progress", tracker.summary())


# ============ ERRORS ============

@app.errorhandler(NotFoundError)
def handle_not_found(e):
    return jsonify({"error": str(e)}), 404


@app.errorhandler(InvalidGoalError)
@app.errorhandler(ValidationError)
def handle_bad_request(e):
    return jsonify({"error": str(e)}), 400


@app.errorhandler(AuthError)
def handle_auth_error(e):
    return jsonify({"error": str(e)}), 401


@app.errorhandler(SyncError)
def handle_sync_error(e):
    print(f"{YELLOW}[SYNC ERROR]{RESET} {e}")
    return jsonify({"error": str(e), "persisted": False}), 502


@app.errorhandler(CacheWriteError)
def handle_cache_error(e):
    print(f"{YELLOW}[SAVE ERROR]{RESET} {e}")
    return jsonify({"error": str(e), "persisted": False}), 500


# ============ API REST ============

@app.route('/api/status', methods=['GET'])
def api_status():
    """Connection and login state."""
    backend, user, tracker = current_session()
    return jsonify({
        "connected": backend is not None,
        "user": user.to_dict() if user else None,
        "progress_loaded": bool(tracker and tracker.store.loaded),
    })


def _start_session(action):
    data = request_data()
    email = data.get("email") or ""
    password = data.get("password") or ""
    if not isinstance(email, str) or not isinstance(password, str):
        raise ValidationError("Email and password must be strings")
    email = email.strip()
    if not email or not password:
        raise ValidationError("Email and password are required")

    backend = get_backend()
    auth_call = backend.auth.sign_in if action == "login" else backend.auth.sign_up
    user = remote(auth_call(email, password))
    print(f"{GREEN}[AUTH]{RESET} {action}: {user.email or user.id}")

    with session_state["lock"]:
        curriculum = session_state["curriculum"]
        goal_cache = session_state["goal_cache"]

    store = ProgressStore(backend.completions, curriculum, timeout=config.SYNC_TIMEOUT)
    tracker = RoadmapTracker(curriculum, store, goal_cache)

    with session_state["lock"]:
        session_state["user"] = user
        session_state["tracker"] = tracker

    error = load_progress(tracker, user.id)
    summary = tracker.summary()
    emit_progress(tracker)

    return jsonify({
        "user": user.to_dict(),
        "summary": summary,
        "progress_error": error,
    })


@app.route('/api/auth/login', methods=['POST'])
def api_login():
    """Sign in and load progress."""
    return _start_session("login")


@app.route('/api/auth/signup', methods=['POST'])
def api_signup():
    """Create an account and load (empty) progress."""
    return _start_session("signup")


@app.route('/api/auth/logout', methods=['POST'])
def api_logout():
    backend, user, tracker = current_session()
    if user is None:
        return jsonify({"status": "logged_out"})

    tracker.store.reset()
    with session_state["lock"]:
        session_state["user"] = None
        session_state["tracker"] = None

    # Local session is cleared even if the remote sign out fails
    try:
        remote(backend.auth.sign_out())
    except SyncError as e:
        print(f"{YELLOW}[AUTH]{RESET} sign out failed: {e}")
        return jsonify({"status": "logged_out", "warning": str(e)})

    print(f"{GREEN}[AUTH]{RESET} logout: {user.email or user.id}")
    return jsonify({"status": "logged_out"})


@app.route('/api/roadmap', methods=['GET'])
def api_roadmap():
    """Full roadmap with per-week completion and goal state."""
    _, user, tracker = current_session()
    if user is None:
        return not_logged_in()

    with session_state["lock"]:
        curriculum = session_state["curriculum"]

    return jsonify({
        "title": curriculum.title,
        "loading": not tracker.store.loaded,
        "tracks": tracker.track_views(),
    })


@app.route('/api/roadmap/summary', methods=['GET'])
def api_summary():
    """Progress summary, or {"loading": true} until progress has loaded."""
    _, user, tracker = current_session()
    if user is None:
        return not_logged_in()
    return jsonify(tracker.summary())


@app.route('/api/roadmap/reload', methods=['POST'])
def api_reload():
    """Retry loading progress after a sync failure."""
    _, user, tracker = current_session()
    if user is None:
        return not_logged_in()

    error = load_progress(tracker, user.id)
    if error:
        return jsonify({"error": error, "loading": True}), 502

    emit_progress(tracker)
    return jsonify(tracker.summary())


@app.route('/api/roadmap/weeks/<week_id>', methods=['GET'])
def api_week(week_id):
    _, user, tracker = current_session()
    if user is None:
        return not_logged_in()
    return jsonify(tracker.week_view(week_id))


@app.route('/api/roadmap/weeks/<week_id>/toggle', methods=['POST'])
def api_toggle_week(week_id):
    """Mark a week complete or incomplete."""
    _, user, tracker = current_session()
    if user is None:
        return not_logged_in()

    try:
        week_view = loop.run(tracker.toggle_week(week_id))
    except SyncError:
        # Rolled back locally; tell clients the real state
        emit_progress(tracker, tracker.week_view(week_id))
        raise

    state = "complete" if week_view["complete"] else "incomplete"
    print(f"{GREEN}[SAVE]{RESET} {week_id} {state}")
    emit_progress(tracker, week_view)
    return jsonify({"week": week_view, "summary": tracker.summary()})


@app.route('/api/roadmap/weeks/<week_id>/goals/<int:goal_index>/toggle', methods=['POST'])
def api_toggle_goal(week_id, goal_index):
    """Check or uncheck one goal (stored on this machine only)."""
    _, user, tracker = current_session()
    if user is None:
        return not_logged_in()

    week_view = tracker.toggle_goal(week_id, goal_index)
    emit_progress(tracker, week_view)
    return jsonify({"week": week_view})


@app.route('/api/roadmap/weeks/<week_id>/goals', methods=['DELETE'])
def api_clear_goals(week_id):
    _, user, tracker = current_session()
    if user is None:
        return not_logged_in()

    tracker.curriculum.find_week(week_id)
    tracker.goal_cache.clear_week(week_id)
    week_view = tracker.week_view(week_id)
    emit_progress(tracker, week_view)
    return jsonify({"week": week_view})


@app.route('/api/projects', methods=['GET'])
def api_list_projects():
    backend, user, _ = current_session()
    if user is None:
        return not_logged_in()

    projects = remote(backend.projects.list(user.id))
    return jsonify({
        "projects": [p.to_dict() for p in projects],
        "total": len(projects),
    })


@app.route('/api/projects', methods=['POST'])
def api_create_project():
    backend, user, _ = current_session()
    if user is None:
        return not_logged_in()

    draft = ProjectDraft.from_form(request_data())
    project = remote(backend.projects.create(user.id, draft))
    print(f"{GREEN}[SAVE]{RESET} Project created: {project.title}")
    return jsonify(project.to_dict()), 201


@app.route('/api/projects/<project_id>', methods=['DELETE'])
def api_delete_project(project_id):
    backend, user, _ = current_session()
    if user is None:
        return not_logged_in()

    remote(backend.projects.delete(user.id, project_id))
    print(f"{GREEN}[SAVE]{RESET} Project deleted: {project_id}")
    return jsonify({"status": "deleted", "id": project_id})


@app.route('/api/journal', methods=['GET'])
def api_list_journal():
    """Journal entries, five per page, most recent first."""
    backend, user, _ = current_session()
    if user is None:
        return not_logged_in()

    page = request.args.get("page", default=0, type=int)
    entries = remote(backend.journals.list(user.id))
    result = paginate(entries, page)
    result["entries"] = [e.to_dict() for e in result["entries"]]
    result["total"] = len(entries)
    return jsonify(result)


@app.route('/api/journal', methods=['POST'])
def api_save_journal():
    """Create or overwrite the entry for a day (default: today)."""
    backend, user, _ = current_session()
    if user is None:
        return not_logged_in()

    data = request_data()
    data.setdefault("entry_date", date.today().isoformat())
    entry = JournalEntry.from_dict(data)
    saved = remote(backend.journals.upsert(user.id, entry))
    print(f"{GREEN}[SAVE]{RESET} Journal entry: {saved.entry_date.isoformat()}")
    return jsonify(saved.to_dict())


init_state(config.CACHE_PATH, config.CURRICULUM_PATH)


def main():
    parser = argparse.ArgumentParser(description="Roadmap, projects and journal tracker")
    parser.add_argument("--port", type=int, default=config.PORT,
                        help=f"API port (default: {config.PORT})")
    parser.add_argument("--cache", type=Path, default=config.CACHE_PATH,
                        help="Goal checklist JSON file (default: data/week_goals.json)")
    parser.add_argument("--curriculum", type=Path, default=config.CURRICULUM_PATH,
                        help="Roadmap JSON file (default: built-in roadmap)")
    parser.add_argument("--export-curriculum", type=Path, default=None,
                        help="Write the active roadmap as JSON and exit")
    args = parser.parse_args()

    init_state(args.cache, args.curriculum)

    if args.export_curriculum:
        save_curriculum(session_state["curriculum"], args.export_curriculum)
        print(f"{GREEN}[SAVE]{RESET} Roadmap written to {args.export_curriculum}")
        return

    curriculum = session_state["curriculum"]
    last = curriculum.last_week

    print("=" * 50)
    print(curriculum.title)
    print("=" * 50)
    print(f"Weeks: {curriculum.total_weeks}")
    if last:
        print(f"Ends: {last.end_date.isoformat()}")
    print(f"Goal cache: {args.cache}")
    print(f"Supabase: {config.SUPABASE_URL or DIM + 'not configured' + RESET}")
    print(f"API: http://0.0.0.0:{args.port}")
    print("-" * 50)
    print("Endpoints:")
    print("  POST /api/auth/login                        - sign in")
    print("  GET  /api/roadmap                           - roadmap + state")
    print("  GET  /api/roadmap/summary                   - progress summary")
    print("  POST /api/roadmap/weeks/<id>/toggle         - week complete")
    print("  POST /api/roadmap/weeks/<id>/goals/<n>/toggle - goal checkbox")
    print("  GET  /api/projects  /api/journal            - showcase, journal")
    print("=" * 50)

    loop.start()

    try:
        socketio.run(app, host='0.0.0.0', port=args.port, use_reloader=False, allow_unsafe_werkzeug=True)
    except KeyboardInterrupt:
        print(f"\n{CYAN}Shutting down...{RESET}")
    finally:
        loop.stop()


if __name__ == "__main__":
    main()
