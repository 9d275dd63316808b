from flask import Blueprint, current_app, send_from_directory

from api.deps import get_hit_counter

bp = Blueprint("fileserver", __name__)


@bp.before_request
def count_hit():
    get_hit_counter().increment()


@bp.get("/")
@bp.get("/<path:path>")
def serve(path: str = "index.html"):
    """
    Static front-end files (every request counts toward /admin/metrics)
    ---
    tags: [App]
    responses:
      200: { description: File contents }
      404: { description: Not found }
    """
    return send_from_directory(current_app.config["FILESERVER_ROOT"], path)
