from flask import Blueprint, abort, current_app

from api.deps import get_hit_counter, get_storage

bp = Blueprint("admin", __name__)

METRICS_PAGE = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>"""


@bp.get("/metrics")
def metrics():
    """
    Fileserver hit counter
    ---
    tags: [Admin]
    produces:
      - text/html
    responses:
      200: { description: OK }
    """
    html = METRICS_PAGE.format(hits=get_hit_counter().value)
    return html, 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.post("/reset")
def reset():
    """
    Delete all users and zero the hit counter (dev platform only)
    ---
    tags: [Admin]
    responses:
      200: { description: Reset done }
      403: { description: Not allowed outside dev }
    """
    if current_app.config.get("PLATFORM") != "dev":
        abort(403, description="Not allowed in production")

    deleted = get_storage().delete_all_users()
    counter = get_hit_counter()
    counter.reset()
    message = f"Hits have been set to {counter.value}\nAll users deleted ({deleted})"
    return message, 200, {"Content-Type": "text/plain; charset=utf-8"}
