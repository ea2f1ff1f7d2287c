"""TodoStore abstract interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from tasksync.todos.models import Todo


class TodoStore(ABC):
    """Abstract interface for durable todo storage.

    The store persists the whole record set at once. Readers observe
    either the state before or after a `replace_all`, never a partial
    write; a failed `replace_all` leaves the previous state intact.
    """

    @abstractmethod
    async def initialize(self, samples: Sequence[Todo] = ()) -> bool:
        """Prepare storage, seeding `samples` if nothing was persisted yet.

        Returns True if the samples were written.
        """
        pass

    @abstractmethod
    async def load_all(self) -> list[Todo]:
        """Load every persisted todo in stored order.

        Raises:
            StorageError: If the persisted state is unreadable or corrupt
        """
        pass

    @abstractmethod
    async def replace_all(self, todos: Sequence[Todo]) -> None:
        """Atomically replace the persisted record set.

        Raises:
            StorageError: If the write fails
        """
        pass
