"""Sample todos written on first start so the list is never empty."""

from datetime import date

from tasksync.todos.models import Priority, Status, Todo

SAMPLE_TODOS: tuple[Todo, ...] = (
    Todo(
        id=1,
        header="Complete Project Proposal",
        description="Finish writing the quarterly project proposal for the client meeting",
        start_date=date(2024, 1, 15),
        due_date=date(2024, 1, 20),
        priority=Priority.HIGH,
        status=Status.IN_PROGRESS,
    ),
    Todo(
        id=2,
        header="Team Meeting",
        description="Weekly team sync to discuss project progress and blockers",
        start_date=date(2024, 1, 16),
        due_date=date(2024, 1, 16),
        priority=Priority.MEDIUM,
        status=Status.PENDING,
    ),
    Todo(
        id=3,
        header="Code Review",
        description="Review pull requests from team members and provide feedback",
        start_date=date(2024, 1, 10),
        due_date=date(2024, 1, 18),
        priority=Priority.LOW,
        status=Status.COMPLETED,
    ),
)
