"""
Squad Routes Blueprint

JSON API for squad analysis, lineup edits, player search, CSV import and
the sample import file.
"""

from io import BytesIO

from flask import Blueprint, current_app, jsonify, request, send_file
from pydantic import ValidationError

from extensions import csrf, limiter
from models.constants import DEFAULT_FORMATION
from schemas.squad import ImportRequestSchema, format_validation_errors
from services.roster_csv_service import RosterCSVService
from services.squad_analysis_manager import SquadAnalysisManager
from services.squad_builder_service import SquadBuilderService
from services.upload_service import UploadService

squad_bp = Blueprint('squad', __name__, url_prefix='/api/squad')
squad_manager = SquadAnalysisManager()

# JSON API, no form tokens
csrf.exempt(squad_bp)


def _api_rate_limit():
    return current_app.config.get('API_RATE_LIMIT', '30 per minute')


@squad_bp.route("/formations")
def formations():
    """Supported formation labels."""
    return jsonify({
        'formations': SquadBuilderService.FORMATIONS,
        'default': DEFAULT_FORMATION
    })


@squad_bp.route("/analyze", methods=["POST"])
@limiter.limit(_api_rate_limit)
def analyze():
    """
    Analyse a submitted squad.

    Body: JSON squad (name, formation, starting, bench)
    Returns: analysis JSON, or 400 with a list of errors
    """
    payload = request.get_json(silent=True)
    analysis, errors = squad_manager.analyze_payload(payload)

    if analysis is None:
        current_app.logger.warning(f"Analysis rejected: {errors}")
        return jsonify({'errors': errors}), 400

    return jsonify(analysis.to_dict())


def _lineup_response(lineup, errors):
    if lineup is None:
        return jsonify({'errors': errors}), 400

    starting, bench = lineup
    return jsonify({
        'starting': [p.to_dict() for p in starting],
        'bench': [p.to_dict() for p in bench]
    })


@squad_bp.route("/lineup/add", methods=["POST"])
@limiter.limit(_api_rate_limit)
def add_player():
    """
    Add a player to a lineup.

    Body: JSON with formation, starting, bench and the player to add
    Returns: the new starting lineup and bench, or 400 with errors
    """
    return _lineup_response(*squad_manager.add_player(request.get_json(silent=True)))


@squad_bp.route("/lineup/move", methods=["POST"])
@limiter.limit(_api_rate_limit)
def move_player():
    """
    Move a player between the starting lineup and bench.

    Body: JSON with formation, starting, bench, player_id and from_starting
    Returns: the new starting lineup and bench, or 400 with errors
    """
    return _lineup_response(*squad_manager.move_player(request.get_json(silent=True)))


@squad_bp.route("/players", methods=["POST"])
@limiter.limit(_api_rate_limit)
def search_players():
    """
    Select players from a fantasy data feed.

    Body: JSON with feed 'elements' and 'teams', plus either 'picks',
    'player_id', or the optional 'position', 'search' and 'limit' filters
    Returns: matching players, or 400 with errors
    """
    players, errors = squad_manager.search_players(request.get_json(silent=True))

    if players is None:
        return jsonify({'errors': errors}), 400

    return jsonify({
        'players': [p.to_dict() for p in players],
        'count': len(players)
    })


@squad_bp.route("/import", methods=["POST"])
@limiter.limit(_api_rate_limit)
def import_squad():
    """
    Import a squad from CSV.

    Accepts either a multipart upload ('csv_file', with optional 'team_name'
    and 'formation' fields) or a JSON body with 'content'.
    Returns parsed players, advisory errors and the arranged squad.
    """
    if 'csv_file' in request.files:
        upload_service = UploadService(
            upload_extensions=current_app.config['UPLOAD_EXTENSIONS'],
            max_content_length=current_app.config['MAX_CONTENT_LENGTH']
        )
        file = request.files['csv_file']

        is_valid, error_msg = upload_service.validate_uploaded_file(file)
        if not is_valid:
            return jsonify({'errors': [error_msg]}), 400

        content, error_msg = upload_service.read_text(file)
        if content is None:
            return jsonify({'errors': [error_msg]}), 400

        team_name = request.form.get('team_name', '').strip() or 'Imported Team'
        formation = request.form.get('formation', '').strip() or DEFAULT_FORMATION
    else:
        try:
            import_request = ImportRequestSchema.model_validate(request.get_json(silent=True) or {})
        except ValidationError as ve:
            return jsonify({'errors': format_validation_errors(ve)}), 400

        content = import_request.content
        team_name = import_request.team_name
        formation = import_request.formation

    current_app.logger.info(f"Starting CSV import for '{team_name}' ({formation})")
    result, squad = squad_manager.import_csv(content, team_name=team_name, formation=formation)

    if result.errors:
        current_app.logger.warning(f"Import errors: {result.errors}")

    response = result.to_dict()
    response['squad'] = squad.to_dict()
    return jsonify(response)


@squad_bp.route("/sample-csv")
def sample_csv():
    """Download the sample import file."""
    output = BytesIO(RosterCSVService.generate_sample_csv().encode('utf-8'))
    return send_file(
        output,
        mimetype='text/csv',
        as_attachment=True,
        download_name='sample_squad.csv'
    )
