from .cast_lookup import CastLookupUseCase
from .title_search import TitleSearchUseCase

__all__ = ["CastLookupUseCase", "TitleSearchUseCase"]
