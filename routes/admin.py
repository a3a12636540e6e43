from flask import Blueprint, jsonify

from classes.admin_manager import AdminManager
from storage.factory import get_store
from utils.helpers import json_body
from utils.utils import admin_required

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/progress', methods=['GET'])
@admin_required
def get_all_progress():
    return jsonify(AdminManager(get_store()).list_all_progress())


@admin_bp.route('/users', methods=['GET'])
@admin_required
def get_users():
    return jsonify(AdminManager(get_store()).list_users())


@admin_bp.route('/users', methods=['POST'])
@admin_required
def add_user():
    """Admin can add a new staff user."""
    data = json_body()

    user = AdminManager(get_store()).create_user(
        data.get("email"),
        data.get("password"),
        data.get("name")
    )
    return jsonify({"success": True, "user": user})


# Dashboard counters
@admin_bp.route('/summary', methods=['GET'])
@admin_required
def get_summary():
    return jsonify(AdminManager(get_store()).summary())
