import logging

from flask import Blueprint, jsonify, request

from jobsearch.shared import SearchRequestError, sanitize_error_message

from ..utils.services import get_job_search_service

logger = logging.getLogger(__name__)
jobs_bp = Blueprint("jobs", __name__, url_prefix="/api/jobs")


@jobs_bp.route("/search", methods=["POST"])
def api_search_jobs():
    """Search job providers for the given skills, query and resume text."""
    try:
        payload = request.get_json(silent=True)
        result = get_job_search_service().search(payload)
        return jsonify(result), 200
    except SearchRequestError as e:
        logger.warning(f"Rejected job search request: {e}")
        return jsonify({"jobs": [], "error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error searching jobs: {e}", exc_info=True)
        return jsonify({"jobs": [], "error": sanitize_error_message(e)}), 500
