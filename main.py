"""
main.py — Shortest-Path Pulse Flask App
========================================
JSON driver for the steppable Dijkstra demo.  The browser owns the frame
loop and the drawing; this server owns the graph, the engine and the
Stepper, and answers every frame with the StepEvent (if any) it produced.

Routes:
  GET  /api/state              – graph, phase, stepper state, distances
  POST /api/graph/generate     – generate a new random connected graph
  POST /api/graph/import       – load a graph from its dict form
  POST /api/run                – initialise Dijkstra (optional source / target)
  POST /api/tick               – feed one frame delta to the Stepper
  POST /api/step               – force one engine step (manual stepping)
  POST /api/pause              – pause ticking
  POST /api/resume             – resume ticking
  POST /api/speed              – set speed multiplier or preset
  POST /api/reset              – drop the current run
  POST /api/run/complete       – record a full run, return analytics

State management:
  Runs live in process memory, one per browser session, keyed by a random
  id stored in the Flask session cookie.  At most MAX_RUNS are kept; the
  least recently used run is dropped first and its session simply gets a
  fresh default graph next time.  Nothing is persisted; a server restart
  starts everyone over.
"""

from collections import OrderedDict
from dataclasses import asdict, dataclass, field
import logging
import math
import random
import secrets
from typing import Optional

from flask import Flask, jsonify, request, session

from graph import Graph, GraphGenerator, MalformedGraph
from algorithms import InvalidState, ShortestPathEngine, StepEvent
from engine import Recorder, Stepper


logger = logging.getLogger(__name__)


app = Flask(__name__)
app.secret_key = secrets.token_hex(32)
app.config.update(
    DEFAULT_NODE_COUNT=16,
    CANVAS_WIDTH=650,
    CANVAS_HEIGHT=420,
    CANVAS_PADDING=40,
    MAX_NODE_COUNT=200,
    MAX_RUNS=256,
)


# ---------------------------------------------------------------------------
# Per-session run
# ---------------------------------------------------------------------------
@dataclass
class Run:
    graph:      Graph
    engine:     ShortestPathEngine = field(default_factory=ShortestPathEngine)
    stepper:    Optional[Stepper]  = None
    last_event: Optional[StepEvent] = None

    def __post_init__(self):
        if self.stepper is None:
            self.stepper = Stepper(self.engine, on_step=self._remember)

    def _remember(self, event: StepEvent) -> None:
        self.last_event = event


# least recently used first; trimmed to MAX_RUNS
RUNS: "OrderedDict[str, Run]" = OrderedDict()


def _session_id() -> str:
    if "sid" not in session:
        session["sid"] = secrets.token_hex(16)
    return session["sid"]


def _generate(node_count: Optional[int] = None, seed: Optional[int] = None, **canvas) -> Graph:
    cfg = app.config
    if seed is not None and not isinstance(seed, (int, float, str)):
        raise ValueError(f"seed must be a number or a string, got {seed!r}")
    gen = GraphGenerator(rng=random.Random(seed))
    count = cfg["DEFAULT_NODE_COUNT"] if node_count is None else _number("nodes", node_count, int)
    if not 0 <= count <= cfg["MAX_NODE_COUNT"]:
        raise ValueError(f"nodes must be between 0 and {cfg['MAX_NODE_COUNT']}")

    def dimension(name: str, default: float) -> float:
        value = canvas.get(name)
        if value is None:
            return float(default)
        value = _number(name, value, float)
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"{name} must be a finite, non-negative number")
        return value

    return gen.generate(
        count,
        dimension("width", cfg["CANVAS_WIDTH"]),
        dimension("height", cfg["CANVAS_HEIGHT"]),
        dimension("padding", cfg["CANVAS_PADDING"]),
    )


def _number(name: str, value, cast):
    """Coerce a JSON field, turning lists, objects and junk into ValueError."""
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}") from None


def get_run() -> Run:
    """Current session's run, creating one on a default graph if needed."""
    sid = _session_id()
    if sid in RUNS:
        RUNS.move_to_end(sid)
        return RUNS[sid]
    return _store(sid, Run(graph=_generate()))


def replace_graph(graph: Graph) -> Run:
    return _store(_session_id(), Run(graph=graph))


def _store(sid: str, run: Run) -> Run:
    RUNS[sid] = run
    RUNS.move_to_end(sid)
    while len(RUNS) > app.config["MAX_RUNS"]:
        evicted, _ = RUNS.popitem(last=False)
        logger.info("Evicted idle run for session %s", evicted)
    return run


def describe(run: Run) -> dict:
    engine  = run.engine
    stepper = run.stepper
    return {
        "source":        engine.source_id or run.graph.source_id,
        "target":        engine.target_id or run.graph.target_id,
        "phase":         engine.phase.value,
        "stepper":       stepper.state.value,
        "speed":         stepper.speed,
        "steps_taken":   stepper.steps_taken,
        "algorithm":     engine.state.snapshot() if engine.state else None,
        "last_event":    run.last_event.to_dict() if run.last_event else None,
        "node_count":    run.graph.node_count(),
        "edge_count":    run.graph.edge_count(),
    }


def _json() -> dict:
    return request.get_json(silent=True) or {}


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------
@app.errorhandler(InvalidState)
def handle_invalid_state(exc: InvalidState):
    return jsonify({"error": str(exc)}), 409


@app.errorhandler(ValueError)
def handle_bad_input(exc: ValueError):
    # MalformedGraph is a ValueError too
    logger.info("Rejected request: %s", exc)
    return jsonify({"error": str(exc)}), 400


# ---------------------------------------------------------------------------
# API: State
# ---------------------------------------------------------------------------
@app.route("/api/state")
def api_state():
    run = get_run()
    payload = describe(run)
    payload["graph"] = run.graph.to_dict()
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Graph
# ---------------------------------------------------------------------------
@app.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    data = _json()
    g = _generate(
        node_count=data.get("nodes"),
        seed=data.get("seed"),
        width=data.get("width"),
        height=data.get("height"),
        padding=data.get("padding"),
    )
    replace_graph(g)
    return jsonify({"graph": g.to_dict(), "connected": g.is_connected()})


@app.route("/api/graph/import", methods=["POST"])
def api_graph_import():
    data = _json()
    if "graph" not in data:
        raise MalformedGraph("request body must contain a 'graph' object")
    g = Graph.from_dict(data["graph"])
    replace_graph(g)
    return jsonify({"graph": g.to_dict(), "connected": g.is_connected()})


# ---------------------------------------------------------------------------
# API: Run
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = _json()
    run = get_run()
    run.stepper.reset()
    run.last_event = None
    run.engine.initialize(run.graph, data.get("source"), data.get("target"))
    return jsonify(describe(run))


@app.route("/api/tick", methods=["POST"])
def api_tick():
    data = _json()
    dt = _number("dt", data.get("dt", 1.0), float)
    run = get_run()
    event = run.stepper.tick(dt)
    return jsonify({"event": event.to_dict() if event else None, "state": describe(run)})


@app.route("/api/step", methods=["POST"])
def api_step():
    run = get_run()
    event = run.engine.step()
    run.last_event = event
    return jsonify({"event": event.to_dict(), "state": describe(run)})


# ---------------------------------------------------------------------------
# API: Playback controls
# ---------------------------------------------------------------------------
@app.route("/api/pause", methods=["POST"])
def api_pause():
    run = get_run()
    run.stepper.pause()
    return jsonify(describe(run))


@app.route("/api/resume", methods=["POST"])
def api_resume():
    run = get_run()
    run.stepper.resume()
    return jsonify(describe(run))


@app.route("/api/speed", methods=["POST"])
def api_speed():
    data = _json()
    run = get_run()
    if "preset" in data:
        run.stepper.set_speed_preset(data["preset"])
    else:
        run.stepper.set_speed(data.get("speed", 1.0))
    return jsonify(describe(run))


@app.route("/api/reset", methods=["POST"])
def api_reset():
    run = get_run()
    run.stepper.reset()
    run.last_event = None
    return jsonify(describe(run))


# ---------------------------------------------------------------------------
# API: Analytics
# ---------------------------------------------------------------------------
@app.route("/api/run/complete", methods=["POST"])
def api_run_complete():
    data = _json()
    run = get_run()
    rec = Recorder()
    metrics = rec.record(run.graph, data.get("source"), data.get("target"))
    return jsonify({"metrics": asdict(metrics), "events": [e.to_dict() for e in rec.events]})


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    _configure_logging()
    logger.info("Shortest-path pulse server on http://localhost:5000")
    app.run(debug=True, host="0.0.0.0", port=5000)
