from functools import wraps

from flask import Flask, request, jsonify, make_response
from flask_cors import CORS
from dealsplit import AnalysisProcessor, CsvExporter, TrackerClient, TrackerError
from dealsplit.config import get_config
from dealsplit.output import OutputBuilder
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

config = get_config()

app = Flask(__name__)

# Enable CORS for all routes
CORS(app)

# Initialize the analysis pipeline and tracker client
processor = AnalysisProcessor()
tracker = TrackerClient()
output_builder = OutputBuilder()


def _bearer_token():
    """Token from 'Authorization: Bearer <token>', or None."""
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def _with_player_level(input_data):
    """Fill player_level from the tracker when the request does not carry one."""
    if input_data.get("player_level") or input_data.get("playerLevel"):
        return input_data
    level = tracker.get_player_level_or_default(_bearer_token())
    return {**input_data, "player_level": output_builder.player_level_to_dict(level)}


def handle_errors(view):
    """Translate engine and tracker errors into JSON error responses."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)

        except ValueError as e:
            # Validation errors from the pipeline
            logger.error(f"Validation error: {str(e)}")
            return jsonify({
                "error": str(e),
                "status": "validation_failed"
            }), 400

        except TrackerError as e:
            logger.error(f"Tracker error: {str(e)}")
            return jsonify({
                "error": str(e),
                "status": "tracker_unavailable"
            }), 502

        except Exception as e:
            # Unexpected errors
            logger.error(f"Processing error: {str(e)}", exc_info=True)
            return jsonify({
                "error": str(e),
                "status": "failed"
            }), 500
    return wrapper


def _json_body():
    input_data = request.get_json(force=True, silent=True)
    if not input_data or not isinstance(input_data, dict):
        raise ValueError("No input data provided")
    return input_data


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Tournament Deal Splitter API",
        "version": "1.0",
        "environment": config.environment,
        "endpoints": {
            "player_level": "/api/player/level [GET]",
            "analyze": "/api/tournaments/analyze [POST]",
            "recalculate": "/api/tournaments/recalculate [POST]",
            "export": "/api/tournaments/export [POST]",
            "submit_session": "/api/sessions/submit [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/api/player/level", methods=["GET"])
@handle_errors
def player_level():
    """Current player's level, or the default level when unavailable"""
    level = tracker.get_player_level_or_default(_bearer_token())
    return jsonify(output_builder.player_level_to_dict(level)), 200


@app.route("/api/tournaments/analyze", methods=["POST"])
@handle_errors
def analyze_tournaments():
    """
    Parse uploaded summary documents and split every tournament
    """
    input_data = _json_body()

    documents = input_data.get("documents") or []
    logger.info(f"Analyzing {len(documents)} documents")

    result = processor.process_from_dict(_with_player_level(input_data))

    logger.info(f"Analysis complete: {result['summary']['total_tournaments']} tournaments")

    return jsonify(result), 200


@app.route("/api/tournaments/recalculate", methods=["POST"])
@handle_errors
def recalculate_tournaments():
    """Re-run the split on already parsed tournaments"""
    input_data = _json_body()
    result = processor.recalculate_from_dict(_with_player_level(input_data))
    return jsonify(result), 200


@app.route("/api/tournaments/export", methods=["POST"])
@handle_errors
def export_tournaments():
    """Download calculated tournaments as CSV"""
    input_data = _json_body()

    facts = processor.tournaments_from_dict(input_data)

    exporter = CsvExporter(input_data.get("locale") or config.csv_locale)

    response = make_response(exporter.export(facts))
    response.headers['Content-Type'] = 'text/csv; charset=utf-8'
    response.headers['Content-Disposition'] = 'attachment; filename=tournaments.csv'
    return response


@app.route("/api/sessions/submit", methods=["POST"])
@handle_errors
def submit_session():
    """
    Recalculate the given tournaments and submit them as a session
    """
    token = _bearer_token()
    if not token:
        return jsonify({
            "error": "Authorization token required",
            "status": "unauthorized"
        }), 401

    input_data = _with_player_level(_json_body())
    facts = processor.tournaments_from_dict(input_data)
    if not facts:
        raise ValueError("tournaments must contain at least one tournament")

    level = processor.player_level_from_dict(input_data)
    result = processor.recalculate(facts, level)
    session_id = tracker.submit_session(token, result.summary, result.tournaments)

    return jsonify({
        "session_id": session_id,
        "status": "submitted",
        "summary": output_builder.summary_to_dict(result.summary)
    }), 200


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=config.port, debug=False)
