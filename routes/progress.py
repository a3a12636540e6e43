from flask import Blueprint, jsonify, g

from classes.progress_manager import ProgressManager
from storage.factory import get_store
from utils.helpers import json_body
from utils.utils import login_required

progress_bp = Blueprint("progress", __name__)


# Fetch own progress (created on first read)
@progress_bp.route("/progress", methods=["GET"])
@login_required
def get_progress():
    record = ProgressManager(get_store()).get_progress(g.user["id"])
    return jsonify(record.to_dict())


# Acknowledge a section
@progress_bp.route("/progress", methods=["POST"])
@login_required
def update_progress():
    data = json_body()

    record = ProgressManager(get_store()).acknowledge_section(
        g.user["id"],
        data.get("sectionId"),
        data.get("acknowledged")
    )
    return jsonify(record.to_dict())
