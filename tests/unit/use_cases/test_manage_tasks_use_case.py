import pytest

from taskhub.app.repositories.task_repository import TaskFilter
from taskhub.app.use_cases.tasks import ManageTasksUseCase, TaskCommand
from taskhub.domain.base import utcnow
from taskhub.domain.entities import Project, Task, TaskPriority, TaskStatus


def _task(task_id: int = 1, owner_id: int = 5, **overrides) -> Task:
    now = utcnow()
    fields = dict(
        id=task_id,
        title="Write copy",
        description="",
        status=TaskStatus.pending,
        priority=TaskPriority.medium,
        user_id=owner_id,
        created_at=now,
        updated_at=now,
    )
    fields.update(overrides)
    return Task(**fields)


async def _assign_id(task: Task) -> Task:
    task.id = 77
    return task


@pytest.mark.asyncio
async def test_create_task_defaults(mock_uow):
    mock_uow.tasks.create.side_effect = _assign_id

    result = await ManageTasksUseCase(mock_uow).create_task(5, TaskCommand(title="Write copy"))

    assert result.is_ok()
    task = result.value
    assert task.id == 77
    assert task.user_id == 5
    assert task.status == TaskStatus.pending
    assert task.priority == TaskPriority.medium
    assert task.project_id is None
    assert task.project_name is None
    assert task.completed_at is None


@pytest.mark.asyncio
async def test_create_completed_task_sets_completed_at(mock_uow):
    mock_uow.tasks.create.side_effect = _assign_id

    result = await ManageTasksUseCase(mock_uow).create_task(
        5, TaskCommand(title="Done already", status=TaskStatus.completed)
    )

    assert result.is_ok()
    assert result.value.completed_at is not None


@pytest.mark.asyncio
async def test_create_task_in_own_project(mock_uow):
    # Arrange
    mock_uow.tasks.create.side_effect = _assign_id
    mock_uow.projects.get_owned.return_value = Project(id=3, name="Website", user_id=5)

    # Act
    result = await ManageTasksUseCase(mock_uow).create_task(
        5, TaskCommand(title="Write copy", project_id=3)
    )

    # Assert
    assert result.is_ok()
    assert result.value.project_id == 3
    assert result.value.project_name == "Website"
    mock_uow.projects.get_owned.assert_called_once_with(3, 5)


@pytest.mark.asyncio
async def test_create_task_in_foreign_project_is_rejected(mock_uow):
    mock_uow.projects.get_owned.return_value = None

    result = await ManageTasksUseCase(mock_uow).create_task(
        5, TaskCommand(title="Sneaky", project_id=9)
    )

    assert result.is_err()
    assert result.error.code == "PROJECT_NOT_FOUND"
    mock_uow.tasks.create.assert_not_called()


@pytest.mark.asyncio
async def test_create_task_requires_title(mock_uow):
    result = await ManageTasksUseCase(mock_uow).create_task(5, TaskCommand(title=""))

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_list_tasks_passes_filter_and_owner(mock_uow):
    # Arrange
    mock_uow.tasks.list_by_owner.return_value = [(_task(2, project_id=3), "Website"), (_task(1), None)]
    task_filter = TaskFilter(status=TaskStatus.pending, search="copy")

    # Act
    result = await ManageTasksUseCase(mock_uow).list_tasks(5, task_filter)

    # Assert
    assert result.is_ok()
    assert [(t.id, t.project_name) for t in result.value] == [(2, "Website"), (1, None)]
    mock_uow.tasks.list_by_owner.assert_called_once_with(5, task_filter)


@pytest.mark.asyncio
async def test_count_tasks(mock_uow):
    mock_uow.tasks.count_by_owner.return_value = 4

    result = await ManageTasksUseCase(mock_uow).count_tasks(5, TaskFilter())

    assert result.is_ok()
    assert result.value.count == 4


@pytest.mark.asyncio
async def test_get_task_of_other_user_is_not_found(mock_uow):
    result = await ManageTasksUseCase(mock_uow).get_task(1, 6)

    assert result.is_err()
    assert result.error.code == "TASK_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_task_never_changes_owner(mock_uow):
    # Arrange
    mock_uow.tasks.get_owned.return_value = (_task(title="Edited"), None)

    # Act
    result = await ManageTasksUseCase(mock_uow).update_task(
        1, 5, TaskCommand(title="Edited", priority=TaskPriority.high)
    )

    # Assert
    assert result.is_ok()
    assert result.value.title == "Edited"
    task_id, owner_id, values = mock_uow.tasks.update_owned.call_args.args
    assert (task_id, owner_id) == (1, 5)
    assert "user_id" not in values
    assert values["priority"] == TaskPriority.high


@pytest.mark.asyncio
async def test_update_task_not_owned(mock_uow):
    mock_uow.tasks.update_owned.return_value = False

    result = await ManageTasksUseCase(mock_uow).update_task(1, 6, TaskCommand(title="Hijack"))

    assert result.is_err()
    assert result.error.code == "TASK_NOT_FOUND"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_update_task_into_foreign_project_is_rejected(mock_uow):
    mock_uow.projects.get_owned.return_value = None

    result = await ManageTasksUseCase(mock_uow).update_task(
        1, 5, TaskCommand(title="Move", project_id=9)
    )

    assert result.is_err()
    assert result.error.code == "PROJECT_NOT_FOUND"
    mock_uow.tasks.update_owned.assert_not_called()


@pytest.mark.asyncio
async def test_delete_task(mock_uow):
    result = await ManageTasksUseCase(mock_uow).delete_task(1, 5)

    assert result.is_ok()
    assert result.value.message == "Task deleted successfully"
    mock_uow.tasks.delete_owned.assert_called_once_with(1, 5)


@pytest.mark.asyncio
async def test_delete_task_not_owned(mock_uow):
    mock_uow.tasks.delete_owned.return_value = False

    result = await ManageTasksUseCase(mock_uow).delete_task(1, 6)

    assert result.is_err()
    assert result.error.code == "TASK_NOT_FOUND"
