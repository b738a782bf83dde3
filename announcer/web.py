"""
予定一覧のJSON公開
シート上の有効な予定をHTTP GETでJSON配列として返す
"""

from flask import Flask, Response

from .logger import get_logger
from .task_matcher import tasks_to_json

logger = get_logger(__name__)


def create_app(rows_source) -> Flask:
    app = Flask(__name__)

    @app.route("/", methods=["GET"])
    @app.route("/tasks", methods=["GET"])
    def get_tasks():
        rows = rows_source.get_rows()
        body = tasks_to_json(rows)
        logger.debug(f"予定一覧を返却: {len(rows)}行")
        return Response(body, mimetype="application/json")

    return app
