from .author_controller import AuthorController
from .entry_controller import EntryController
from .statistics_controller import StatisticsController

__all__ = ["AuthorController", "EntryController", "StatisticsController"]
