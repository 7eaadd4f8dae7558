"""Task CRUD endpoints."""

from flask import Blueprint, current_app, jsonify, request

from taskapi.schemas import TaskSchema
from taskapi.services import TaskService


tasks_bp = Blueprint("tasks", __name__, url_prefix="/tasks")

task_schema = TaskSchema()
tasks_schema = TaskSchema(many=True)


def _service() -> TaskService:
    return current_app.extensions["task_service"]


@tasks_bp.route("", methods=["POST"])
def create_task():
    """Create a new task.

    Returns:
        JSON response with the created task and 201 status.
    """
    task = _service().create(request.get_json(silent=True))
    return jsonify(task_schema.dump(task)), 201


@tasks_bp.route("", methods=["GET"])
def list_tasks():
    """List every task.

    Returns:
        JSON array of tasks, empty when the store is empty.
    """
    return jsonify(tasks_schema.dump(_service().list()))


@tasks_bp.route("/<task_id>", methods=["GET"])
def get_task(task_id: str):
    """Get a single task by id.

    Args:
        task_id: Hex-encoded task id.

    Returns:
        JSON response with task data.
    """
    return jsonify(task_schema.dump(_service().get(task_id)))


@tasks_bp.route("/<task_id>", methods=["PUT"])
def update_task(task_id: str):
    """Replace a task.

    Args:
        task_id: Hex-encoded task id.

    Returns:
        JSON response with the replacement task.
    """
    task = _service().update(task_id, request.get_json(silent=True))
    return jsonify(task_schema.dump(task))


@tasks_bp.route("/<task_id>", methods=["DELETE"])
def delete_task(task_id: str):
    """Delete a task.

    Args:
        task_id: Hex-encoded task id.

    Returns:
        JSON confirmation message.
    """
    _service().delete(task_id)
    return jsonify({"message": "Task deleted successfully"})
