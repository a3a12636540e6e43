import logging
from flask import Blueprint, jsonify

from classes.auth_manager import AuthManager
from storage.factory import get_store
from utils.errors import Unauthenticated
from utils.helpers import json_body
from utils.utils import current_identity, end_session, start_session

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth_bp', __name__)


# Login
@auth_bp.route('/login', methods=['POST'])
def login():
    data = json_body()

    identity = AuthManager(get_store()).authenticate(data.get("email"), data.get("password"))
    start_session(identity)

    return jsonify({"success": True, "user": identity})


# Logout
@auth_bp.route('/logout', methods=['POST'])
def logout():
    identity = current_identity()
    if identity:
        logger.info("User %s logged out", identity.get("id"))
    end_session()
    return jsonify({"success": True})


# Session check
@auth_bp.route('/session', methods=['GET'])
def get_session():
    identity = current_identity()
    if not identity:
        raise Unauthenticated()

    return jsonify({"user": identity})
