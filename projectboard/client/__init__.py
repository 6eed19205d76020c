from .api import (
    ApiError as ApiError,
    ProjectsApiClient as ProjectsApiClient,
    TokenStore as TokenStore,
)
from .state import (
    BoardState as BoardState,
    Debouncer as Debouncer,
    EditDraft as EditDraft,
    ProjectBoardController as ProjectBoardController,
)
