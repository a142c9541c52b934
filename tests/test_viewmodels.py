# tests/test_viewmodels.py
from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from models import Project, TaskItem, TaskPriority, TaskStatus
from notifications import InMemoryNotificationCenter, NotificationService
from viewmodels import ProjectListViewModel, TaskViewModel
from viewmodels.project_view import GANTT_PALETTE, color_for_name
from viewmodels.task_view import next_status

from .conftest import NOW


def _titles(tasks):
    return [t.title for t in tasks]


@pytest.fixture()
def tagged_tasks(task_store):
    for title, tags, status in [
        ("1", ["a"], TaskStatus.BACKLOG),
        ("2", ["b"], TaskStatus.DONE),
        ("3", ["a", "b"], TaskStatus.DONE),
        ("4", [], TaskStatus.BACKLOG),
    ]:
        task_store.create(TaskItem(title=title, tags=tags, status=status))
    return task_store


# ---- task projection ----


def test_tag_filter_keeps_intersecting_tasks(tagged_tasks):
    vm = TaskViewModel(tagged_tasks)
    vm.selected_tags = {"a"}
    assert _titles(vm.filtered_tasks) == ["1", "3"]

    vm.selected_tags = set()
    assert _titles(vm.filtered_tasks) == ["1", "2", "3", "4"]


def test_tag_and_status_filters_compose(tagged_tasks):
    vm = TaskViewModel(tagged_tasks)
    vm.selected_tags = {"a"}
    vm.selected_status = TaskStatus.DONE
    assert _titles(vm.filtered_tasks) == ["3"]

    vm.selected_tags = set()
    assert _titles(vm.filtered_tasks) == ["2", "3"]

    vm.clear_filters()
    assert _titles(vm.filtered_tasks) == ["1", "2", "3", "4"]


def test_projection_follows_store_without_refresh(task_store):
    vm = TaskViewModel(task_store)
    vm.selected_tags = {"urgent"}
    emissions = []
    vm.changed.connect(lambda v: emissions.append(_titles(v.filtered_tasks)))

    task = TaskItem(title="x", tags=["urgent"])
    task_store.create(task)
    task_store.create(TaskItem(title="y"))
    task_store.delete([task.id])

    assert emissions == [["x"], ["x"], []]
    assert _titles(vm.all_tasks) == ["y"]


def test_toggle_tag(tagged_tasks):
    vm = TaskViewModel(tagged_tasks)
    vm.toggle_tag("b")
    assert vm.selected_tags == frozenset({"b"})
    vm.toggle_tag("b")
    assert vm.selected_tags == frozenset()


def test_all_tags_is_union(tagged_tasks):
    assert TaskViewModel(tagged_tasks).all_tags == {"a", "b"}


def test_status_cycle():
    assert next_status(TaskStatus.BACKLOG) == TaskStatus.IN_PROGRESS
    assert next_status(TaskStatus.IN_PROGRESS) == TaskStatus.DONE
    assert next_status(TaskStatus.DONE) == TaskStatus.BACKLOG
    assert next_status(TaskStatus.BLOCKED) == TaskStatus.IN_PROGRESS

    status = TaskStatus.DONE
    seen = []
    for _ in range(6):
        status = next_status(status)
        seen.append(status)
    assert seen == [TaskStatus.BACKLOG, TaskStatus.IN_PROGRESS, TaskStatus.DONE] * 2


def test_toggle_task_status_goes_through_store(task_store, clock):
    vm = TaskViewModel(task_store, clock=clock)
    task = vm.add_task("write tests")
    clock.advance(minutes=5)

    toggled = vm.toggle_task_status(task)

    assert toggled.status == TaskStatus.IN_PROGRESS
    assert task_store.get(task.id).status == TaskStatus.IN_PROGRESS
    assert task_store.get(task.id).updated_at == NOW + timedelta(minutes=5)


def test_overdue_and_groups_pass_through(task_store):
    vm = TaskViewModel(task_store)
    task_store.create(TaskItem(title="late", status=TaskStatus.IN_PROGRESS, due_date=NOW - timedelta(days=1)))
    task_store.create(TaskItem(title="done", status=TaskStatus.DONE, due_date=NOW - timedelta(days=1)))

    assert _titles(vm.overdue_tasks) == ["late"]
    assert set(vm.tasks_grouped_by_status) == {TaskStatus.IN_PROGRESS, TaskStatus.DONE}


def test_add_task_parses_due_date_and_schedules_reminder(task_store, clock):
    center = InMemoryNotificationCenter(granted=True)
    vm = TaskViewModel(task_store, notifications=NotificationService(center), clock=clock)

    task = vm.add_task("ship", priority=TaskPriority.HIGH, due_date="2025-03-12 17:00", tags=["release"])

    assert task.due_date == datetime(2025, 3, 12, 17, 0)
    assert task.created_at == NOW
    assert _titles(task_store.items) == ["ship"]
    assert [(r.title, r.body, r.fire_at) for r in center.reminders] == [
        ("Task Due", "ship is due.", datetime(2025, 3, 12, 17, 0))
    ]


def test_add_task_without_permission_schedules_nothing(task_store, notifications, center):
    vm = TaskViewModel(task_store, notifications=notifications)
    vm.add_task("ship", due_date=NOW)
    assert center.reminders == []


# ---- project / gantt projection ----


def test_gantt_progress(project_store, task_store):
    vm = ProjectListViewModel(project_store, task_store)
    busy, empty = Project(name="busy"), Project(name="empty")
    project_store.create(busy)
    project_store.create(empty)
    for status in (TaskStatus.DONE, TaskStatus.BACKLOG, TaskStatus.BLOCKED, TaskStatus.IN_PROGRESS):
        task_store.create(TaskItem(title=status.value, project_id=busy.id, status=status))
    task_store.create(TaskItem(title="standalone", status=TaskStatus.DONE))

    progress = {g.name: g.progress for g in vm.gantt_items}
    assert progress == {"busy": 0.25, "empty": 0.0}
    assert vm.progress_for(busy.id) == 0.25
    assert vm.progress_for(uuid4()) == 0.0


def test_gantt_recomputes_on_task_change(project_store, task_store):
    vm = ProjectListViewModel(project_store, task_store)
    project = Project(name="p")
    project_store.create(project)
    task = TaskItem(title="t", project_id=project.id)
    task_store.create(task)
    assert vm.gantt_items[0].progress == 0.0

    task_store.update(task.model_copy(update={"status": TaskStatus.DONE}))
    assert vm.gantt_items[0].progress == 1.0


def test_gantt_item_mirrors_project(project_store, task_store):
    vm = ProjectListViewModel(project_store, task_store)
    start = NOW
    project = Project(name="Website", start_date=start, end_date=start + timedelta(days=10))
    project_store.create(project)

    item = vm.gantt_items[0]
    assert (item.id, item.name, item.start_date, item.end_date) == (project.id, "Website", start, project.end_date)
    assert item.color_hex in GANTT_PALETTE


def test_color_is_deterministic_within_a_run():
    assert color_for_name("Website") == color_for_name("Website")
    assert color_for_name("") in GANTT_PALETTE


def test_selected_project_cleared_when_deleted(project_store, task_store):
    vm = ProjectListViewModel(project_store, task_store)
    project = vm.add_project("p", start_date=NOW, end_date=NOW + timedelta(days=2))
    vm.select_project(project)
    assert vm.selected_project == project

    renamed = project.model_copy(update={"name": "renamed"})
    vm.update(renamed)
    assert vm.selected_project.name == "renamed"

    assert vm.delete_project(renamed) is True
    assert vm.selected_project is None
    assert vm.projects == []


def test_add_project_defaults_and_deadline_reminder(project_store, task_store, clock):
    center = InMemoryNotificationCenter(granted=True)
    vm = ProjectListViewModel(project_store, task_store, notifications=NotificationService(center), clock=clock)

    project = vm.add_project("Launch", "summary")

    assert project.start_date == NOW
    assert project.end_date == NOW + timedelta(days=7)
    assert project.duration_days == 7
    assert [(r.title, r.fire_at) for r in center.reminders] == [("Project Deadline", NOW + timedelta(days=6))]


def test_add_message_and_tasks_for_project(project_store, task_store, clock):
    vm = ProjectListViewModel(project_store, task_store, clock=clock)
    project = vm.add_project("p")
    task_store.create(TaskItem(title="t", project_id=project.id))
    author = uuid4()

    message = vm.add_message("hello", project, author)

    assert message.created_at == NOW
    assert project_store.get(project.id).messages[0].body == "hello"
    assert _titles(vm.tasks_for_project(project)) == ["t"]


def test_gantt_bars_follow_layout(project_store, task_store):
    vm = ProjectListViewModel(project_store, task_store)
    vm.add_project("a", start_date=NOW, end_date=NOW + timedelta(days=5))
    vm.add_project("b", start_date=NOW + timedelta(days=5), end_date=NOW + timedelta(days=10))

    bars = vm.gantt_bars(100)
    assert [(b.name, b.x, b.width) for b in bars] == [("a", 0.0, 50.0), ("b", 50.0, 50.0)]
