# realm_rush/routes.py
from flask import Blueprint, jsonify, render_template

from .content.balance import DEFAULTS, MOVE_COSTS, MOVE_REGEN_BONUS, DAMAGE, CAPS, TURN_CAP

arena_bp = Blueprint("arena", __name__, template_folder="templates")

@arena_bp.route("/arena")
def arena_page():
    return render_template("arena.html")

@arena_bp.route("/arena/rules")
def arena_rules():
    return jsonify({
        "defaults": DEFAULTS,
        "move_costs": MOVE_COSTS,
        "move_regen_bonus": MOVE_REGEN_BONUS,
        "damage": DAMAGE,
        "caps": CAPS,
        "turn_cap": TURN_CAP,
    })
