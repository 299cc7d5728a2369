from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import optional_date
from ..common.http import get_json_body
from ..container import Container
from ..users.guards import current_user, token_required
from .service import parse_salary_id


def register(app: Flask, container: Container) -> None:
    salaries = container.salary_service
    login_required = token_required(container.auth_service)

    @app.route("/api/salaries", methods=["POST"], endpoint="salaries_create")
    @login_required
    def create_salary():
        record = salaries.create(owner_user_id=current_user().user_id, data=get_json_body())
        return jsonify(record.to_dict()), 201

    @app.route("/api/salaries", methods=["GET"], endpoint="salaries_list")
    @login_required
    def list_salaries():
        criteria = salaries.build_filter(request.args, owner_user_id=current_user().user_id)
        return jsonify([r.to_dict() for r in salaries.list(criteria)])

    @app.route("/api/salaries/stats", methods=["GET"], endpoint="salaries_stats")
    @login_required
    def salary_stats():
        stats = salaries.stats(
            start_date=optional_date(request.args.get("startDate"), "startDate"),
            end_date=optional_date(request.args.get("endDate"), "endDate"),
            owner_user_id=current_user().user_id,
        )
        return jsonify(stats.to_dict())

    @app.route("/api/salaries/<salary_id>", methods=["GET"], endpoint="salaries_get")
    @login_required
    def get_salary(salary_id: str):
        record = salaries.get_by_id(parse_salary_id(salary_id), owner_user_id=current_user().user_id)
        return jsonify(record.to_dict())

    @app.route("/api/salaries/<salary_id>", methods=["PUT"], endpoint="salaries_update")
    @login_required
    def update_salary(salary_id: str):
        sid = parse_salary_id(salary_id)
        record = salaries.update(sid, get_json_body(), owner_user_id=current_user().user_id)
        return jsonify(record.to_dict())

    @app.route("/api/salaries/<salary_id>", methods=["DELETE"], endpoint="salaries_delete")
    @login_required
    def delete_salary(salary_id: str):
        result = salaries.delete(parse_salary_id(salary_id), owner_user_id=current_user().user_id)
        return jsonify(result)
