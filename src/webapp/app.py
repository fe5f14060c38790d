# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.

"""PixelCircuit Web Application Server.

Flask + Flask-SocketIO backend that loads a circuit image (upload or
synthetic demo drawing), forwards clicks to the simulator, and streams
the lit/unlit overlay frame by frame via REST and WebSocket.
"""

import sys
import base64
import threading
import logging
from pathlib import Path

import cv2
from flask import Flask, request, jsonify
from flask_socketio import SocketIO, emit

# Bootstrap
_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(_ROOT / "src"))

from webapp.session import CircuitSession, STEPS_PER_FRAME, decode_image
from circuit.drawings import DRAWINGS

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = Flask(__name__)
app.config["SECRET_KEY"] = "pixelcircuit-prototype-2026"
app.config["STEPS_PER_FRAME"] = STEPS_PER_FRAME
socketio = SocketIO(app, cors_allowed_origins="*", async_mode="threading")

session = None
_session_lock = threading.Lock()


def _encode(img) -> str:
    """Encode a numpy image to base64 PNG (lossless, keeps pixel edges)."""
    if img is None:
        return ""
    _, buf = cv2.imencode(".png", img)
    return base64.b64encode(buf).decode("ascii")


def _load(pixels, name: str) -> CircuitSession:
    global session
    session = CircuitSession(pixels, steps_per_frame=app.config["STEPS_PER_FRAME"], name=name)
    logger.info("loaded circuit %r: %s", name, session.graph.summary())
    return session


def _parse_interaction(data):
    """Return (x, y, pressed) from a click payload.

    Raises:
        ValueError: If x or y is not an integer or pressed is not a boolean.
    """
    if not isinstance(data, dict):
        raise ValueError("payload must be an object")
    x, y = data.get("x"), data.get("y")
    if type(x) is not int or type(y) is not int:
        raise ValueError("x and y must be integers")
    pressed = data.get("pressed", True)
    if not isinstance(pressed, bool):
        raise ValueError("pressed must be a boolean")
    return x, y, pressed


# ---------------------------------------------------------------------------
# REST API
# ---------------------------------------------------------------------------

@app.route("/api/capabilities")
def capabilities():
    return jsonify({
        "drawings": list(DRAWINGS.keys()),
        "steps_per_frame": app.config["STEPS_PER_FRAME"],
        "loaded": session is not None,
    })


@app.route("/api/circuit", methods=["POST"])
def upload_circuit():
    """Build a circuit from an uploaded image."""
    if "image" not in request.files:
        return jsonify({"error": "No image provided"}), 400
    upload = request.files["image"]
    try:
        pixels = decode_image(upload.read())
        with _session_lock:
            summary = _load(pixels, upload.filename or "upload").summary()
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify(summary)


@app.route("/api/circuit")
def circuit_info():
    with _session_lock:
        if session is None:
            return jsonify({"error": "No circuit loaded"}), 409
        return jsonify(session.summary())


@app.route("/api/demo/<name>")
def load_demo(name):
    if name not in DRAWINGS:
        return jsonify({"error": f"Unknown drawing {name!r}"}), 400
    with _session_lock:
        summary = _load(DRAWINGS[name](), name).summary()
    return jsonify(summary)


@app.route("/api/interact", methods=["POST"])
def interact():
    try:
        x, y, pressed = _parse_interaction(request.get_json(silent=True) or {})
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    with _session_lock:
        if session is None:
            return jsonify({"error": "No circuit loaded"}), 409
        hit = session.interact(x, y, pressed)
    return jsonify({"hit": hit})


@app.route("/api/frame")
def frame():
    with _session_lock:
        if session is None:
            return jsonify({"error": "No circuit loaded"}), 409
        results = session.frame()
    return jsonify(_build_response(results))


# ---------------------------------------------------------------------------
# WebSocket events
# ---------------------------------------------------------------------------

@socketio.on("connect")
def on_connect():
    with _session_lock:
        name = session.name if session is not None else None
    emit("status", {
        "msg": "Connected to PixelCircuit server",
        "circuit": name,
    })


@socketio.on("interact")
def on_interact(data):
    try:
        x, y, pressed = _parse_interaction(data)
    except ValueError as exc:
        emit("error", {"error": str(exc)})
        return
    with _session_lock:
        loaded = session is not None
        hit = session.interact(x, y, pressed) if loaded else False
    if not loaded:
        emit("error", {"error": "No circuit loaded"})
        return
    emit("interacted", {"hit": hit})


@socketio.on("frame")
def on_frame(data=None):
    """Advance one frame and push the overlay."""
    with _session_lock:
        results = session.frame() if session is not None else None
    if results is None:
        emit("error", {"error": "No circuit loaded"})
        return
    emit("result", _build_response(results))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _build_response(results: dict) -> dict:
    return {
        "metrics": {
            "step": results.get("step"),
            "wires_on": results.get("wires_on"),
            "latency_ms": results.get("latency_ms"),
        },
        "images": {
            "overlay": _encode(results.get("overlay")),
            "display": _encode(results.get("display")),
        },
    }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="PixelCircuit Web Application")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--image", help="circuit image to load at start-up")
    parser.add_argument("--demo", choices=sorted(DRAWINGS), help="synthetic drawing to load at start-up")
    parser.add_argument("--steps", type=int, default=STEPS_PER_FRAME, help="simulation steps per frame")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.config["STEPS_PER_FRAME"] = args.steps

    if args.image:
        _load(decode_image(Path(args.image).read_bytes()), Path(args.image).name)
    elif args.demo:
        _load(DRAWINGS[args.demo](), args.demo)

    print()
    print("=" * 56)
    print("  PixelCircuit Web Application")
    print(f"  http://{args.host}:{args.port}")
    print("=" * 56)
    print()
    print(f"  Circuit        : {session.name if session else '(none)'}")
    print(f"  Steps / frame  : {args.steps}")
    print()

    socketio.run(app, host=args.host, port=args.port, debug=args.debug,
                 allow_unsafe_werkzeug=True)
