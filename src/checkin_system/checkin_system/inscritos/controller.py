from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import TransitionError, ValidationError
from ..logger import get_logger

logger = get_logger(__name__)


def register(app: Flask, container) -> None:
    @app.route("/api/inscritos", methods=["GET"], endpoint="inscritos_index")
    def inscritos_index():
        query = request.args.get("query")
        iglesia = request.args.get("iglesia")
        try:
            page = int(request.args.get("page", 1))
        except ValueError:
            page = 1

        result = container.inscrito_service.search(query, iglesia, page=page)
        return jsonify(
            {
                "data": [i.to_dict() for i in result.items],
                "page": result.page,
                "per_page": result.per_page,
                "total": result.total,
                "last_page": result.last_page,
                "query": query,
                "iglesia": iglesia,
                "iglesias": list(result.iglesias),
            }
        )

    @app.route("/api/inscritos/<int:inscrito_id>", methods=["GET"], endpoint="inscritos_show")
    def inscritos_show(inscrito_id: int):
        inscrito = container.inscrito_service.get(inscrito_id)
        if not inscrito:
            return jsonify({"success": False, "message": "Inscrito no encontrado"}), 404
        return jsonify({"success": True, "data": inscrito.to_dict()})

    @app.route("/api/inscritos/attendance", methods=["POST"], endpoint="inscritos_attendance")
    def inscritos_attendance():
        data = request.get_json(silent=True) or {}
        try:
            result = container.attendance_service.apply(data.get("action"), data.get("ids"))
            return jsonify({"success": True, "message": "Actualizado", "updated": result.updated}), 200
        except ValidationError as e:
            return (
                jsonify(
                    {
                        "success": False,
                        "message": str(e),
                        "violations": e.violations,
                        "ids": e.ids if isinstance(e, TransitionError) else [],
                    }
                ),
                422,
            )
        except Exception:
            logger.exception("Attendance update failed")
            return jsonify({"success": False, "message": "Error del sistema al actualizar"}), 500
