"""List-screen machinery shared by every admin resource."""

from .controller import ListState, ResourceListController
from .debounce import Debouncer

__all__ = ["Debouncer", "ListState", "ResourceListController"]
